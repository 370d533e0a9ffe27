"""Shared check for rule administration."""

from tenantauth.domain.exceptions import NotFound, PermissionDenied
from tenantauth.domain.entities import Actor
from tenantauth.domain.services import has_permission
from tenantauth.domain.value_objects import PermissionName


async def load_rule_admin(uow, actor_id: str, verb: str) -> Actor:
    """Load actor and require manage_platform."""
    actor = await uow.users.get_by_id(actor_id)
    if not actor:
        raise NotFound("User", actor_id)
    if not has_permission(actor, PermissionName.MANAGE_PLATFORM):
        raise PermissionDenied(
            f"Insufficient permissions to {verb} permission rules",
            [PermissionName.MANAGE_PLATFORM],
        )
    return actor
