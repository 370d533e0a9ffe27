"""Who may change another user's explicit permissions."""

from collections.abc import Iterable

from tenantauth.domain.entities import Actor
from tenantauth.domain.exceptions import PermissionDenied
from tenantauth.domain.services import (
    can_manage_user,
    effective_permissions,
    has_any_permission,
    has_permission,
)
from tenantauth.domain.value_objects import PermissionName

GRANT_PERMISSIONS = (PermissionName.MANAGE_COMPANY_USERS, PermissionName.MANAGE_PLATFORM)


def ensure_can_grant(
    granter: Actor,
    target: Actor | None = None,
    permissions: Iterable[PermissionName] = (),
) -> None:
    """Granter needs manage_company_users or manage_platform.

    Without manage_platform the granter must also be able to manage target,
    which keeps company admins inside their own company, and may only grant
    permissions they hold themselves, so platform permissions stay out of reach.
    """
    if not has_any_permission(granter, GRANT_PERMISSIONS):
        raise PermissionDenied("Insufficient permissions to assign permissions", GRANT_PERMISSIONS)
    if has_permission(granter, PermissionName.MANAGE_PLATFORM):
        return
    held = effective_permissions(granter)
    beyond = sorted(p for p in permissions if p not in held)
    if beyond:
        raise PermissionDenied("Cannot grant permissions you do not hold", beyond)
    if target is not None and not can_manage_user(granter, target):
        raise PermissionDenied("Insufficient permissions to manage this user")
