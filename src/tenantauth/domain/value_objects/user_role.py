"""User roles for RBAC."""

from enum import StrEnum

from tenantauth.domain.value_objects.vocabulary import parse_member


class UserRole(StrEnum):
    """Roles an actor can hold, from most to least privileged."""

    SUPER_ADMIN = "SUPER_ADMIN"
    COMPANY_ADMIN = "COMPANY_ADMIN"
    COMPANY_MANAGER = "COMPANY_MANAGER"
    COMPANY_USER = "COMPANY_USER"
    INDIVIDUAL_USER = "INDIVIDUAL_USER"

    @classmethod
    def parse(cls, value: object) -> "UserRole":
        return parse_member(cls, value, "role")


COMPANY_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.COMPANY_ADMIN, UserRole.COMPANY_MANAGER, UserRole.COMPANY_USER}
)
