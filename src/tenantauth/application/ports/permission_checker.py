"""Permission checker port - audited authorization checks."""

from collections.abc import Sequence
from typing import Protocol

from tenantauth.domain.entities import Actor, PermissionContext, PermissionRule
from tenantauth.domain.value_objects import PermissionName


class PermissionChecker(Protocol):
    """Port for boolean authorization checks. Each check is recorded for audit."""

    async def has_permission(self, actor: Actor, permission: PermissionName | str) -> bool: ...

    async def has_any_permission(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> bool: ...

    async def has_all_permissions(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> bool: ...

    async def can_access_company(self, actor: Actor, company_id: str) -> bool: ...

    async def can_manage_user(self, manager: Actor, target: Actor | str) -> bool: ...

    async def can_view_user_data(self, viewer: Actor, target: Actor | str) -> bool: ...

    async def can_access_resource(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext | None = None,
    ) -> bool: ...

    async def evaluate_rule(self, rule: PermissionRule, context: PermissionContext) -> bool: ...
