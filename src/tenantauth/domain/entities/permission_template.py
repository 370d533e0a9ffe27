"""Permission template entity - named reusable bundle of permissions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from tenantauth.domain.value_objects import PermissionName


@dataclass
class PermissionTemplate:
    """Template applied to users by union into their explicit permissions."""

    id: UUID
    name: str
    permissions: frozenset[PermissionName]
    created_by: str
    created_at: datetime
    description: str | None = None
    updated_at: datetime | None = field(default=None)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "permissions": sorted(p.value for p in self.permissions),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
