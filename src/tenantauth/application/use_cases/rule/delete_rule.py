"""Delete permission rule use case."""

from uuid import UUID

from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.application.use_cases.rule.rule_admin import load_rule_admin
from tenantauth.domain.entities import AuditEntry
from tenantauth.domain.exceptions import NotFound


class DeleteRuleUseCase:
    """Delete a rule. The deletion itself is audited since the rule row is gone."""

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(self, actor_id: str, rule_id: UUID) -> None:
        async with self._uow_factory() as uow:
            await load_rule_admin(uow, actor_id, "delete")
            rule = await uow.rules.get_by_id(rule_id)
            if not rule:
                raise NotFound("Rule", str(rule_id))
            await uow.rules.delete(rule_id)

        await self._audit.record(
            AuditEntry.new(
                actor_id,
                True,
                action="rule_deleted",
                resource_type=rule.resource_type,
                resource_id=str(rule_id),
                context={"rule": rule.to_dict(), "deleted_by": actor_id},
            )
        )
