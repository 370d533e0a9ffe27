"""Actor entity - a snapshot of the user an authorization decision is about."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from tenantauth.domain.value_objects import (
    COMPANY_ROLES,
    PermissionName,
    SubscriptionTier,
    UserRole,
)


@dataclass(frozen=True)
class Actor:
    """Read-only view of a user as consumed by the engine.

    company_id is None for INDIVIDUAL_USER and SUPER_ADMIN. permissions holds the
    explicit grants only; role permissions come from the role catalog.
    """

    id: str
    role: UserRole
    is_active: bool = True
    company_id: str | None = None
    permissions: frozenset[PermissionName] = field(default_factory=frozenset)
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    email_verified: bool = False
    email: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Actor":
        """Build from a JSON-like mapping, rejecting unknown role/permission/tier strings."""
        return cls(
            id=str(data["id"]),
            role=UserRole.parse(data["role"]),
            is_active=bool(data.get("is_active", True)),
            company_id=data.get("company_id"),
            permissions=frozenset(PermissionName.parse_many(data.get("permissions") or [])),
            subscription_tier=SubscriptionTier.parse(data.get("subscription_tier", "free")),
            email_verified=bool(data.get("email_verified", False)),
            email=data.get("email"),
            name=data.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "is_active": self.is_active,
            "company_id": self.company_id,
            "permissions": sorted(p.value for p in self.permissions),
            "subscription_tier": self.subscription_tier.value,
            "email_verified": self.email_verified,
            "email": self.email,
            "name": self.name,
        }

    def with_permissions(self, permissions: Iterable[PermissionName]) -> "Actor":
        return replace(self, permissions=frozenset(permissions))

    def with_role(self, role: UserRole, permissions: Iterable[PermissionName]) -> "Actor":
        """Copy with a new role. Non-company roles drop the company."""
        company_id = self.company_id if role in COMPANY_ROLES else None
        return replace(self, role=role, company_id=company_id, permissions=frozenset(permissions))
