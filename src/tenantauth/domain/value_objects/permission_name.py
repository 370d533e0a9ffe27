"""Atomic capabilities that can be granted to a user."""

from collections.abc import Iterable
from enum import StrEnum

from tenantauth.domain.value_objects.vocabulary import parse_member


class PermissionName(StrEnum):
    """The closed permission vocabulary."""

    # Platform
    MANAGE_PLATFORM = "manage_platform"
    VIEW_PLATFORM_ANALYTICS = "view_platform_analytics"
    MANAGE_COMPANIES = "manage_companies"
    MANAGE_SUPER_ADMINS = "manage_super_admins"

    # Company
    MANAGE_COMPANY = "manage_company"
    VIEW_COMPANY_ANALYTICS = "view_company_analytics"
    MANAGE_COMPANY_USERS = "manage_company_users"
    MANAGE_DEPARTMENTS = "manage_departments"

    # User
    MANAGE_PROFILE = "manage_profile"
    CREATE_JOURNAL = "create_journal"
    VIEW_OWN_DATA = "view_own_data"
    DELETE_ACCOUNT = "delete_account"
    VIEW_COMPANY_DATA = "view_company_data"

    @classmethod
    def parse(cls, value: object) -> "PermissionName":
        return parse_member(cls, value, "permission")

    @classmethod
    def parse_many(cls, values: Iterable[object]) -> list["PermissionName"]:
        """Parse every value, preserving order. Raises on the first invalid one."""
        return [cls.parse(v) for v in values]


def split_valid(values: Iterable[str]) -> tuple[list[PermissionName], list[str]]:
    """Partition strings into (valid permissions, invalid strings)."""
    valid: list[PermissionName] = []
    invalid: list[str] = []
    allowed = {p.value: p for p in PermissionName}
    for value in values:
        if value in allowed:
            valid.append(allowed[value])
        else:
            invalid.append(value)
    return valid, invalid
