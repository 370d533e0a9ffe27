"""User role and template application resources."""

from uuid import UUID

import falcon
import falcon.asgi

from tenantauth.application.services import AccessGuard
from tenantauth.application.use_cases.role.bulk_assign_role import BulkAssignRoleUseCase
from tenantauth.application.use_cases.role.update_user_role import UpdateUserRoleUseCase
from tenantauth.application.use_cases.template.apply_template import ApplyTemplateUseCase
from tenantauth.domain.exceptions import ValidationError
from tenantauth.interfaces.api.hooks import current_actor, require_active
from tenantauth.interfaces.api.resources._body import json_body, string_list


def parse_uuid(value: str, label: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {label} ID") from None


def _role(body: dict) -> str:
    role = body.get("role")
    if not isinstance(role, str):
        raise ValidationError("'role' is required")
    return role


class UserRoleResource:
    """PUT /v1/users/{user_id}/role - change a user's role."""

    def __init__(self, guard: AccessGuard, update_role: UpdateUserRoleUseCase) -> None:
        self.guard = guard
        self._update_role = update_role

    @falcon.before(require_active())
    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        body = await json_body(req)
        user = await self._update_role.execute(current_actor(req).id, user_id, _role(body))
        resp.media = user.to_dict()
        resp.status = falcon.HTTP_200


class BulkRoleResource:
    """POST /v1/bulk/role - assign one role to many users."""

    def __init__(self, guard: AccessGuard, bulk_assign: BulkAssignRoleUseCase) -> None:
        self.guard = guard
        self._bulk_assign = bulk_assign

    @falcon.before(require_active())
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        users = await self._bulk_assign.execute(
            current_actor(req).id, string_list(body, "user_ids"), _role(body)
        )
        resp.media = {"items": [u.to_dict() for u in users]}
        resp.status = falcon.HTTP_200


class UserTemplateResource:
    """POST /v1/users/{user_id}/templates/{template_id} - apply a template."""

    def __init__(self, guard: AccessGuard, apply_template: ApplyTemplateUseCase) -> None:
        self.guard = guard
        self._apply = apply_template

    @falcon.before(require_active())
    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        template_id: str,
    ) -> None:
        user = await self._apply.execute(
            current_actor(req).id, user_id, parse_uuid(template_id, "template")
        )
        resp.media = user.to_dict()
        resp.status = falcon.HTTP_200
