"""Update permission rule use case."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from tenantauth.application.use_cases.rule.rule_admin import load_rule_admin
from tenantauth.domain.entities import PermissionRule
from tenantauth.domain.exceptions import NotFound


class UpdateRuleUseCase:
    """Replace a stored rule's definition, keeping its identity and creation metadata."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor_id: str, rule_id: UUID, payload: Mapping[str, Any]
    ) -> PermissionRule:
        rule = PermissionRule.from_dict(payload, rule_id=rule_id)
        async with self._uow_factory() as uow:
            await load_rule_admin(uow, actor_id, "update")
            existing = await uow.rules.get_by_id(rule_id)
            if not existing:
                raise NotFound("Rule", str(rule_id))
            rule.created_by = existing.created_by
            rule.created_at = existing.created_at
            rule.updated_by = actor_id
            rule.updated_at = datetime.now(UTC)
            await uow.rules.update(rule)
        return rule
