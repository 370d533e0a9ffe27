"""Permission template resources."""

import falcon
import falcon.asgi

from tenantauth.application.services import AccessGuard
from tenantauth.application.use_cases.template.create_template import CreateTemplateUseCase
from tenantauth.application.use_cases.template.list_templates import ListTemplatesUseCase
from tenantauth.domain.value_objects import PermissionName
from tenantauth.interfaces.api.hooks import (
    current_actor,
    require_any_permission,
    require_permission,
)
from tenantauth.interfaces.api.resources._body import json_body, string_list


class TemplatesResource:
    """GET/POST /v1/templates."""

    def __init__(
        self,
        guard: AccessGuard,
        list_templates: ListTemplatesUseCase,
        create_template: CreateTemplateUseCase,
    ) -> None:
        self.guard = guard
        self._list = list_templates
        self._create = create_template

    @falcon.before(
        require_any_permission(
            [PermissionName.MANAGE_COMPANY_USERS, PermissionName.MANAGE_PLATFORM]
        )
    )
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        templates = await self._list.execute()
        resp.media = {"items": [t.to_dict() for t in templates]}
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission(PermissionName.MANAGE_PLATFORM))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        template = await self._create.execute(
            current_actor(req).id,
            body.get("name", ""),
            string_list(body, "permissions"),
            description=body.get("description"),
        )
        resp.media = template.to_dict()
        resp.status = falcon.HTTP_201
