"""Query audit log use case."""

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.domain.entities import AuditEntry
from tenantauth.domain.exceptions import NotFound
from tenantauth.domain.services import has_permission
from tenantauth.domain.value_objects import PermissionName


class QueryAuditLogUseCase:
    """Read audit entries. Without manage_platform an actor only sees their own."""

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(self, actor_id: str, query: AuditQuery) -> list[AuditEntry]:
        async with self._uow_factory() as uow:
            actor = await uow.users.get_by_id(actor_id)
            if not actor:
                raise NotFound("User", actor_id)

        if not has_permission(actor, PermissionName.MANAGE_PLATFORM):
            query = query.for_user(actor_id)
        return await self._audit.query(query)
