"""Default resource policy - static relationship checks, then stored ABAC rules."""

import logging
from collections.abc import Mapping
from typing import Any

from tenantauth.domain.entities import Actor, PermissionContext, ResourceRef
from tenantauth.domain.services import (
    ConditionLimits,
    applicable_rules,
    can_access_company,
    can_access_owned_resource,
    can_manage_user,
    can_view_user_data,
    evaluate_rule,
)
from tenantauth.domain.services.rule_engine import DEFAULT_LIMITS

logger = logging.getLogger(__name__)


def _attribute(attributes: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in attributes:
            return attributes[name]
    return None


class RuleBasedResourcePolicy:
    """Static check by resource type, then every applicable rule must pass.

    Static checks:
      company - actor can access the company with that id
      user    - "view" uses can_view_user_data, "manage" uses can_manage_user
      other   - resource attributes owner_id/company_id decide ownership;
                resources without an owner are denied

    Rules are the active stored rules for (resource_type, action), evaluated in
    descending priority. A rule evaluating to False vetoes access.
    """

    def __init__(self, unit_of_work_factory: type, limits: ConditionLimits = DEFAULT_LIMITS) -> None:
        self._uow_factory = unit_of_work_factory
        self._limits = limits

    async def can_access(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext | None = None,
    ) -> bool:
        if context is None:
            context = PermissionContext(
                user=actor, resource=ResourceRef(id=resource_id, type=resource_type)
            )

        if not await self._static_check(actor, resource_type, resource_id, action, context):
            return False

        async with self._uow_factory() as uow:
            rules = await uow.rules.list(resource_type=resource_type, action=action)

        for rule in applicable_rules(rules, resource_type, action):
            if not evaluate_rule(rule, context, self._limits):
                logger.info(
                    "Rule %s (%s) refused %s on %s/%s for user %s",
                    rule.id,
                    rule.name,
                    action,
                    resource_type,
                    resource_id,
                    actor.id,
                )
                return False
        return True

    async def _static_check(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext,
    ) -> bool:
        if resource_type == "company":
            return can_access_company(actor, resource_id)

        if resource_type == "user":
            async with self._uow_factory() as uow:
                target = await uow.users.get_by_id(resource_id)
            if target is None:
                return False
            if action == "view":
                return can_view_user_data(actor, target)
            if action == "manage":
                return can_manage_user(actor, target)
            return False

        attributes = context.resource.attributes if context.resource else {}
        owner_id = _attribute(attributes, "owner_id", "ownerId", "user_id", "userId")
        if owner_id is None:
            return False
        owner_company_id = _attribute(attributes, "company_id", "companyId")
        return can_access_owned_resource(actor, str(owner_id), owner_company_id)
