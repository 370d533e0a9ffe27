"""Permission checker implementation - domain checks plus an audit record per decision."""

from collections.abc import Sequence
from typing import Any

from tenantauth.application.ports import ResourcePolicy
from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.domain.entities import Actor, AuditEntry, PermissionContext, PermissionRule
from tenantauth.domain.exceptions import NotFound
from tenantauth.domain.services import (
    DEFAULT_ROLE_CATALOG,
    ConditionLimits,
    RoleCatalog,
    can_access_company,
    can_manage_user,
    can_view_user_data,
    evaluate_rule,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from tenantauth.domain.services.rule_engine import DEFAULT_LIMITS
from tenantauth.domain.value_objects import PermissionName


class TenantAuthPermissionChecker:
    """Evaluates checks with the domain services and records each result."""

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_recorder: AuditRecorder,
        resource_policy: ResourcePolicy,
        catalog: RoleCatalog = DEFAULT_ROLE_CATALOG,
        limits: ConditionLimits = DEFAULT_LIMITS,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder
        self._resource_policy = resource_policy
        self._catalog = catalog
        self._limits = limits

    async def has_permission(self, actor: Actor, permission: PermissionName | str) -> bool:
        """Check a single permission."""
        permission = PermissionName.parse(permission)
        result = has_permission(actor, permission, self._catalog)
        await self._log(actor, result, permission=permission, check_type="basic")
        return result

    async def has_any_permission(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> bool:
        permissions = PermissionName.parse_many(permissions)
        result = has_any_permission(actor, permissions, self._catalog)
        await self._log(
            actor,
            result,
            permission=permissions[0] if permissions else None,
            check_type="any",
            permissions=[p.value for p in permissions],
        )
        return result

    async def has_all_permissions(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> bool:
        permissions = PermissionName.parse_many(permissions)
        result = has_all_permissions(actor, permissions, self._catalog)
        await self._log(
            actor,
            result,
            permission=permissions[0] if permissions else None,
            check_type="all",
            permissions=[p.value for p in permissions],
        )
        return result

    async def can_access_company(self, actor: Actor, company_id: str) -> bool:
        result = can_access_company(actor, company_id)
        await self._log(
            actor, result, resource_type="company", resource_id=company_id, check_type="company"
        )
        return result

    async def can_manage_user(self, manager: Actor, target: Actor | str) -> bool:
        """Check whether manager may manage target. A target id is looked up first."""
        target = await self._resolve(target)
        result = can_manage_user(manager, target)
        await self._log(
            manager,
            result,
            action="manage",
            resource_type="user",
            resource_id=target.id,
            check_type="manage_user",
        )
        return result

    async def can_view_user_data(self, viewer: Actor, target: Actor | str) -> bool:
        target = await self._resolve(target)
        result = can_view_user_data(viewer, target, self._catalog)
        await self._log(
            viewer,
            result,
            action="view",
            resource_type="user",
            resource_id=target.id,
            check_type="view_user_data",
        )
        return result

    async def can_access_resource(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext | None = None,
    ) -> bool:
        result = await self._resource_policy.can_access(
            actor, resource_type, resource_id, action, context
        )
        await self._log(
            actor,
            result,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            check_type="resource",
        )
        return result

    async def evaluate_rule(self, rule: PermissionRule, context: PermissionContext) -> bool:
        result = evaluate_rule(rule, context, self._limits)
        await self._log(
            context.user,
            result,
            action=rule.action,
            resource_type=rule.resource_type,
            resource_id=context.resource.id if context.resource else None,
            check_type="rule",
            rule_id=str(rule.id),
            **context.snapshot(),
        )
        return result

    async def _resolve(self, target: Actor | str) -> Actor:
        if isinstance(target, Actor):
            return target
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(target)
        if user is None:
            raise NotFound("User", target)
        return user

    async def _log(
        self,
        actor: Actor,
        result: bool,
        *,
        permission: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **context: Any,
    ) -> None:
        context.setdefault("user_role", actor.role.value)
        context.setdefault("user_company", actor.company_id)
        await self._audit.record(
            AuditEntry.new(
                actor.id,
                result,
                permission=str(permission) if permission else None,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                reason=None if result else "check_failed",
                context=context,
            )
        )
