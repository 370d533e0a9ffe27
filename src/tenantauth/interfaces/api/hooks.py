"""Falcon before-hooks that enforce access with the resource's AccessGuard.

Usage::

    class RulesResource:
        @falcon.before(require_permission(PermissionName.MANAGE_PLATFORM))
        async def on_get(self, req, resp): ...

The resource must expose its guard as ``self.guard``.
"""

from collections.abc import Sequence

from tenantauth.domain.entities import Actor
from tenantauth.domain.exceptions import Unauthenticated
from tenantauth.domain.value_objects import PermissionName


def current_actor(req) -> Actor:
    """Actor attached by AuthMiddleware, or raise Unauthenticated."""
    actor = getattr(req.context, "user", None)
    if actor is None:
        raise Unauthenticated("Authentication required")
    return actor


async def require_authenticated(req, resp, resource, params) -> None:
    current_actor(req)


def require_active():
    async def hook(req, resp, resource, params) -> None:
        await resource.guard.require_active_user(current_actor(req))

    return hook


def require_permission(permission: PermissionName | str):
    async def hook(req, resp, resource, params) -> None:
        await resource.guard.require_active_user_with_permission(current_actor(req), permission)

    return hook


def require_any_permission(permissions: Sequence[PermissionName | str]):
    async def hook(req, resp, resource, params) -> None:
        actor = current_actor(req)
        await resource.guard.require_active_user(actor)
        await resource.guard.require_any_permission(actor, permissions)

    return hook


def require_user_data_access(param: str = "user_id"):
    """Caller must be allowed to view the user named by the route parameter."""

    async def hook(req, resp, resource, params) -> None:
        await resource.guard.require_user_data_access(current_actor(req), params[param])

    return hook
