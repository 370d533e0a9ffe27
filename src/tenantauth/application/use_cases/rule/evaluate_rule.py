"""Evaluate stored rule use case."""

from uuid import UUID

from tenantauth.application.ports import PermissionChecker
from tenantauth.domain.entities import PermissionContext
from tenantauth.domain.exceptions import NotFound


class EvaluateRuleUseCase:
    """Load a rule by id and evaluate it against a context (audited)."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, rule_id: UUID, context: PermissionContext) -> bool:
        async with self._uow_factory() as uow:
            rule = await uow.rules.get_by_id(rule_id)
            if not rule:
                raise NotFound("Rule", str(rule_id))
        return await self._permission_checker.evaluate_rule(rule, context)
