"""Permission API resources."""

import falcon
import falcon.asgi

from tenantauth.application.services import AccessGuard
from tenantauth.application.use_cases.permission.assign_permissions import (
    AssignPermissionsUseCase,
)
from tenantauth.application.use_cases.permission.bulk_assign_permissions import (
    BulkAssignPermissionsUseCase,
)
from tenantauth.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from tenantauth.application.use_cases.permission.revoke_permissions import (
    RevokePermissionsUseCase,
)
from tenantauth.interfaces.api.hooks import (
    current_actor,
    require_active,
    require_authenticated,
    require_user_data_access,
)
from tenantauth.interfaces.api.resources._body import json_body, string_list


class MyPermissionsResource:
    """GET /v1/me/permissions - caller's effective permissions."""

    def __init__(self, get_effective: GetEffectivePermissionsUseCase) -> None:
        self._get_effective = get_effective

    @falcon.before(require_authenticated)
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        result = await self._get_effective.execute(current_actor(req).id)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """GET/POST/DELETE /v1/users/{user_id}/permissions."""

    def __init__(
        self,
        guard: AccessGuard,
        get_effective: GetEffectivePermissionsUseCase,
        assign: AssignPermissionsUseCase,
        revoke: RevokePermissionsUseCase,
    ) -> None:
        self.guard = guard
        self._get_effective = get_effective
        self._assign = assign
        self._revoke = revoke

    @falcon.before(require_user_data_access())
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Effective permissions of user_id with provenance."""
        result = await self._get_effective.execute(user_id)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_active())
    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Assign explicit permissions (union)."""
        body = await json_body(req)
        user = await self._assign.execute(
            current_actor(req).id, user_id, string_list(body, "permissions")
        )
        resp.media = user.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_active())
    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Revoke explicit permissions."""
        body = await json_body(req)
        user = await self._revoke.execute(
            current_actor(req).id, user_id, string_list(body, "permissions")
        )
        resp.media = user.to_dict()
        resp.status = falcon.HTTP_200


class BulkPermissionsResource:
    """POST /v1/bulk/permissions - union permissions into many users."""

    def __init__(self, guard: AccessGuard, bulk_assign: BulkAssignPermissionsUseCase) -> None:
        self.guard = guard
        self._bulk_assign = bulk_assign

    @falcon.before(require_active())
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        users = await self._bulk_assign.execute(
            current_actor(req).id,
            string_list(body, "user_ids"),
            string_list(body, "permissions"),
        )
        resp.media = {"items": [u.to_dict() for u in users]}
        resp.status = falcon.HTTP_200
