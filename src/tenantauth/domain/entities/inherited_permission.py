"""Inherited permission - a held permission and where it came from."""

from dataclasses import dataclass

from tenantauth.domain.value_objects import PermissionName, PermissionSource


@dataclass(frozen=True)
class InheritedPermission:
    """Provenance record for one permission."""

    permission: PermissionName
    source: PermissionSource
    source_id: str
    source_name: str
