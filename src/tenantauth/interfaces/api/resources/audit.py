"""Audit log resource."""

from datetime import datetime

import falcon
import falcon.asgi

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.application.services import AccessGuard
from tenantauth.application.use_cases.audit.query_audit_log import QueryAuditLogUseCase
from tenantauth.domain.exceptions import ValidationError
from tenantauth.interfaces.api.hooks import current_actor, require_active

MAX_LIMIT = 1000


def _timestamp(req: falcon.asgi.Request, name: str) -> datetime | None:
    value = req.get_param(name)
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"'{name}' must be an ISO 8601 timestamp") from None


class AuditResource:
    """GET /v1/audit?user_id=&start=&end=&result=&permission=&limit="""

    def __init__(self, guard: AccessGuard, query_audit: QueryAuditLogUseCase) -> None:
        self.guard = guard
        self._query = query_audit

    @falcon.before(require_active())
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        limit = req.get_param_as_int("limit", min_value=1, max_value=MAX_LIMIT) or 100
        query = AuditQuery(
            user_id=req.get_param("user_id"),
            start=_timestamp(req, "start"),
            end=_timestamp(req, "end"),
            result=req.get_param_as_bool("result"),
            permission=req.get_param("permission"),
            limit=limit,
        )
        entries = await self._query.execute(current_actor(req).id, query)
        resp.media = {"items": [e.to_dict() for e in entries]}
        resp.status = falcon.HTTP_200
