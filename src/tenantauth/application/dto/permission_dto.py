"""Permission DTOs."""

from dataclasses import dataclass

from tenantauth.domain.entities import InheritedPermission
from tenantauth.domain.value_objects import PermissionName


@dataclass
class EffectivePermissionsOutput:
    """Effective permissions of a user with their provenance."""

    user_id: str
    permissions: list[PermissionName]
    inherited: list[InheritedPermission]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "permissions": [p.value for p in self.permissions],
            "inherited": [
                {
                    "permission": i.permission.value,
                    "source": i.source.value,
                    "source_id": i.source_id,
                    "source_name": i.source_name,
                }
                for i in self.inherited
            ],
        }
