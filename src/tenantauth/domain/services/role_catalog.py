"""Role catalog - role hierarchy and base permission sets.

The tables are built once at import and exposed read-only. Every function takes
an optional ``catalog`` so tests can substitute a different table without
touching module state.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from tenantauth.domain.entities import Actor
from tenantauth.domain.value_objects import COMPANY_ROLES, PermissionName, UserRole

P = PermissionName

_USER_PERMISSIONS = (P.MANAGE_PROFILE, P.CREATE_JOURNAL, P.VIEW_OWN_DATA, P.DELETE_ACCOUNT)


@dataclass(frozen=True)
class RoleCatalog:
    """Immutable role -> level and role -> permissions tables.

    Both tables must cover every UserRole and levels must be distinct.
    """

    levels: Mapping[UserRole, int]
    permissions: Mapping[UserRole, frozenset[PermissionName]]

    def __post_init__(self) -> None:
        for name, table in (("levels", self.levels), ("permissions", self.permissions)):
            missing = [r.value for r in UserRole if r not in table]
            if missing:
                raise ValueError(f"Role catalog {name} table is missing: {', '.join(missing)}")
        if len(set(self.levels.values())) != len(self.levels):
            raise ValueError("Role catalog levels must be distinct")
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))
        object.__setattr__(
            self,
            "permissions",
            MappingProxyType({r: frozenset(p) for r, p in self.permissions.items()}),
        )


DEFAULT_ROLE_CATALOG = RoleCatalog(
    levels={
        UserRole.INDIVIDUAL_USER: 1,
        UserRole.COMPANY_USER: 2,
        UserRole.COMPANY_MANAGER: 3,
        UserRole.COMPANY_ADMIN: 4,
        UserRole.SUPER_ADMIN: 5,
    },
    permissions={
        UserRole.SUPER_ADMIN: frozenset(PermissionName),
        UserRole.COMPANY_ADMIN: frozenset(
            {
                P.MANAGE_COMPANY,
                P.VIEW_COMPANY_ANALYTICS,
                P.MANAGE_COMPANY_USERS,
                P.MANAGE_DEPARTMENTS,
                *_USER_PERMISSIONS,
                P.VIEW_COMPANY_DATA,
            }
        ),
        UserRole.COMPANY_MANAGER: frozenset(
            {
                P.VIEW_COMPANY_ANALYTICS,
                P.MANAGE_DEPARTMENTS,
                *_USER_PERMISSIONS,
                P.VIEW_COMPANY_DATA,
            }
        ),
        UserRole.COMPANY_USER: frozenset({*_USER_PERMISSIONS, P.VIEW_COMPANY_DATA}),
        UserRole.INDIVIDUAL_USER: frozenset(_USER_PERMISSIONS),
    },
)


def role_level(role: UserRole | str, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG) -> int:
    """Hierarchy level of role; higher means more privilege."""
    return catalog.levels[UserRole.parse(role)]


def is_higher_role(
    role: UserRole | str, other: UserRole | str, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> bool:
    return role_level(role, catalog) > role_level(other, catalog)


def role_permissions(
    role: UserRole | str, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> set[PermissionName]:
    """Base permissions of role. Returns a new set the caller may modify."""
    return set(catalog.permissions[UserRole.parse(role)])


def role_grants(
    role: UserRole, permission: PermissionName, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> bool:
    """Membership test without copying the table."""
    return permission in catalog.permissions[role]


def assignable_roles(assigner: Actor) -> list[UserRole]:
    """Roles assigner may hand out, most privileged first."""
    if not assigner.is_active:
        return []
    if assigner.role == UserRole.SUPER_ADMIN:
        return list(UserRole)
    if assigner.role == UserRole.COMPANY_ADMIN:
        return [r for r in UserRole if r in COMPANY_ROLES]
    return []


def can_assign_role(
    assigner: Actor, target_role: UserRole | str, target_company_id: str | None = None
) -> bool:
    """Whether assigner may give target_role to a user of target_company_id.

    Company admins may only assign company roles inside their own company.
    """
    target_role = UserRole.parse(target_role)
    if not assigner.is_active:
        return False
    if assigner.role == UserRole.SUPER_ADMIN:
        return True
    if assigner.role == UserRole.COMPANY_ADMIN and assigner.company_id == target_company_id:
        return target_role in COMPANY_ROLES
    return False
