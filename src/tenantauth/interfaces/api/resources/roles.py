"""Role catalog resources."""

import falcon
import falcon.asgi

from tenantauth.domain.services import assignable_roles, role_level, role_permissions
from tenantauth.interfaces.api.hooks import current_actor, require_authenticated


class AssignableRolesResource:
    """GET /v1/roles/assignable - roles the caller may hand out."""

    @falcon.before(require_authenticated)
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "items": [
                {
                    "role": role.value,
                    "level": role_level(role),
                    "permissions": sorted(p.value for p in role_permissions(role)),
                }
                for role in assignable_roles(current_actor(req))
            ]
        }
        resp.status = falcon.HTTP_200
