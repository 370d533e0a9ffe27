"""Effective permissions and permission provenance."""

from collections.abc import Iterable

from tenantauth.domain.entities import Actor, InheritedPermission
from tenantauth.domain.services.role_catalog import DEFAULT_ROLE_CATALOG, RoleCatalog, role_grants
from tenantauth.domain.value_objects import PermissionName, PermissionSource


def effective_permissions(
    actor: Actor,
    additional: Iterable[PermissionName | str] = (),
    catalog: RoleCatalog = DEFAULT_ROLE_CATALOG,
) -> frozenset[PermissionName]:
    """Union of role, explicit and additional permissions."""
    return (
        catalog.permissions[actor.role]
        | actor.permissions
        | frozenset(PermissionName.parse_many(additional))
    )


def permission_source(
    actor: Actor,
    permission: PermissionName | str,
    catalog: RoleCatalog = DEFAULT_ROLE_CATALOG,
) -> PermissionSource:
    permission = PermissionName.parse(permission)
    if permission in actor.permissions:
        return PermissionSource.DIRECT
    if role_grants(actor.role, permission, catalog):
        return PermissionSource.ROLE
    return PermissionSource.NONE


def inherited_permissions(
    actor: Actor, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> list[InheritedPermission]:
    """Every (permission, source) pair held by actor: role entries first, then direct."""
    role_name = actor.role.value.replace("_", " ").lower()
    inherited = [
        InheritedPermission(
            permission=p,
            source=PermissionSource.ROLE,
            source_id=actor.role.value,
            source_name=role_name,
        )
        for p in sorted(catalog.permissions[actor.role])
    ]
    inherited.extend(
        InheritedPermission(
            permission=p,
            source=PermissionSource.DIRECT,
            source_id=actor.id,
            source_name="Direct Assignment",
        )
        for p in sorted(actor.permissions)
    )
    return inherited
