"""Create permission rule use case."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from tenantauth.application.use_cases.rule.rule_admin import load_rule_admin
from tenantauth.domain.entities import PermissionRule


class CreateRuleUseCase:
    """Validate and store a new ABAC rule."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, payload: Mapping[str, Any]) -> PermissionRule:
        """Create rule from payload. Actor must hold manage_platform."""
        rule = PermissionRule.from_dict(payload)
        async with self._uow_factory() as uow:
            await load_rule_admin(uow, actor_id, "create")
            now = datetime.now(UTC)
            rule.created_by = actor_id
            rule.updated_by = actor_id
            rule.created_at = now
            rule.updated_at = now
            await uow.rules.create(rule)
        return rule
