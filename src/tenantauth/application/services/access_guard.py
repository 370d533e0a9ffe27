"""Access guard - turns authorization checks into pass-or-raise calls.

Every ``require_*`` method returns None when the check passes and raises an
AuthorizationError subclass when it fails. Guards never mutate anything; the
only side effect is the audit entry written for the underlying check.
"""

import logging
from collections.abc import Sequence

from tenantauth.application.ports import PermissionChecker
from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.domain.entities import Actor, AuditEntry, PermissionContext
from tenantauth.domain.exceptions import (
    AuthorizationError,
    InactiveActor,
    PermissionDenied,
    ResourceAccessDenied,
    RoleDenied,
)
from tenantauth.domain.value_objects import PermissionName, SubscriptionTier, UserRole

logger = logging.getLogger(__name__)


def _quoted(values: Sequence[object]) -> str:
    return "', '".join(str(v) for v in values)


class AccessGuard:
    """Enforcement facade over a PermissionChecker."""

    def __init__(self, permission_checker: PermissionChecker, audit_recorder: AuditRecorder) -> None:
        self._checker = permission_checker
        self._audit = audit_recorder

    # --- permissions ---

    async def require_permission(self, actor: Actor, permission: PermissionName | str) -> None:
        permission = PermissionName.parse(permission)
        if not await self._checker.has_permission(actor, permission):
            self._deny(
                actor,
                PermissionDenied(
                    f"Access denied: Missing required permission '{permission}'", [permission]
                ),
            )

    async def require_any_permission(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> None:
        permissions = PermissionName.parse_many(permissions)
        if not await self._checker.has_any_permission(actor, permissions):
            self._deny(
                actor,
                PermissionDenied(
                    f"Access denied: Missing required permissions '{_quoted(permissions)}'",
                    permissions,
                ),
            )

    async def require_all_permissions(
        self, actor: Actor, permissions: Sequence[PermissionName | str]
    ) -> None:
        permissions = PermissionName.parse_many(permissions)
        if not await self._checker.has_all_permissions(actor, permissions):
            self._deny(
                actor,
                PermissionDenied(
                    f"Access denied: Missing required permissions '{_quoted(permissions)}'",
                    permissions,
                ),
            )

    # --- roles ---

    async def require_role(self, actor: Actor, role: UserRole | str) -> None:
        role = UserRole.parse(role)
        passed = actor.role == role
        await self._record(actor, "require_role", passed, required=[role.value])
        if not passed:
            raise self._logged(
                actor,
                RoleDenied(
                    f"Access denied: Required role '{role}', but user has '{actor.role}'",
                    [role],
                    actor.role,
                ),
            )

    async def require_any_role(self, actor: Actor, roles: Sequence[UserRole | str]) -> None:
        roles = [UserRole.parse(r) for r in roles]
        passed = actor.role in roles
        await self._record(actor, "require_any_role", passed, required=[r.value for r in roles])
        if not passed:
            raise self._logged(
                actor,
                RoleDenied(
                    f"Access denied: Required roles '{_quoted(roles)}', but user has '{actor.role}'",
                    roles,
                    actor.role,
                ),
            )

    # --- relationships ---

    async def require_company_access(self, actor: Actor, company_id: str) -> None:
        if not await self._checker.can_access_company(actor, company_id):
            self._deny(
                actor,
                ResourceAccessDenied(
                    "Access denied: Cannot access company resources", "company", company_id
                ),
            )

    async def require_user_management(self, manager: Actor, target: Actor | str) -> None:
        if not await self._checker.can_manage_user(manager, target):
            self._deny(
                manager,
                ResourceAccessDenied(
                    "Access denied: Cannot manage this user", "user", _target_id(target)
                ),
            )

    async def require_user_data_access(self, viewer: Actor, target: Actor | str) -> None:
        if not await self._checker.can_view_user_data(viewer, target):
            self._deny(
                viewer,
                ResourceAccessDenied(
                    "Access denied: Cannot view user data", "user", _target_id(target)
                ),
            )

    async def require_resource_access(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext | None = None,
    ) -> None:
        allowed = await self._checker.can_access_resource(
            actor, resource_type, resource_id, action, context
        )
        if not allowed:
            self._deny(
                actor,
                ResourceAccessDenied(
                    f"Access denied: Cannot {action} {resource_type} resource",
                    resource_type,
                    resource_id,
                ),
            )

    # --- account state ---

    async def require_active_user(self, actor: Actor) -> None:
        await self._record(actor, "require_active_user", actor.is_active)
        if not actor.is_active:
            raise self._logged(actor, InactiveActor())

    async def require_verified_email(self, actor: Actor) -> None:
        await self._record(actor, "require_verified_email", actor.email_verified)
        if not actor.email_verified:
            raise self._logged(actor, PermissionDenied("Access denied: Email verification required"))

    async def require_subscription_tier(
        self, actor: Actor, required_tier: SubscriptionTier | str
    ) -> None:
        required_tier = SubscriptionTier.parse(required_tier)
        passed = actor.subscription_tier.level >= required_tier.level
        await self._record(
            actor,
            "require_subscription_tier",
            passed,
            required=[required_tier.value],
        )
        if not passed:
            raise self._logged(
                actor, PermissionDenied(f"Access denied: {required_tier} subscription required")
            )

    # --- composites ---

    async def require_active_user_with_permission(
        self, actor: Actor, permission: PermissionName | str
    ) -> None:
        await self.require_active_user(actor)
        await self.require_permission(actor, permission)

    async def require_owner_or_admin(self, actor: Actor, owner_id: str) -> None:
        """Owner, super admin, or a company admin holding view_company_data."""
        await self.require_active_user(actor)
        passed = actor.id == owner_id or actor.role == UserRole.SUPER_ADMIN
        if not passed and actor.role == UserRole.COMPANY_ADMIN and actor.company_id:
            passed = await self._checker.has_permission(actor, PermissionName.VIEW_COMPANY_DATA)
        await self._record(actor, "require_owner_or_admin", passed, resource_id=owner_id)
        if not passed:
            raise self._logged(
                actor, PermissionDenied("Access denied: Must be resource owner or administrator")
            )

    async def require_same_company_access(self, actor: Actor, target: Actor) -> None:
        await self.require_active_user(actor)
        passed = actor.role == UserRole.SUPER_ADMIN or (
            actor.company_id is not None and actor.company_id == target.company_id
        )
        await self._record(actor, "require_same_company_access", passed, resource_id=target.id)
        if not passed:
            raise self._logged(
                actor,
                ResourceAccessDenied(
                    "Access denied: Users must be in the same company", "company", target.company_id
                ),
            )

    # --- helpers ---

    async def _record(
        self,
        actor: Actor,
        action: str,
        result: bool,
        *,
        required: list[str] | None = None,
        resource_id: str | None = None,
    ) -> None:
        context: dict = {"user_role": actor.role.value}
        if required:
            context["required"] = required
        await self._audit.record(
            AuditEntry.new(
                actor.id,
                result,
                action=action,
                resource_id=resource_id,
                reason=None if result else "guard_failed",
                context=context,
            )
        )

    def _deny(self, actor: Actor, error: AuthorizationError) -> None:
        """Raise error, upgraded to InactiveActor when the actor is deactivated."""
        if not actor.is_active:
            error = InactiveActor()
        raise self._logged(actor, error)

    @staticmethod
    def _logged(actor: Actor, error: AuthorizationError) -> AuthorizationError:
        logger.info("Denied user %s: %s (%s)", actor.id, error.message, error.code)
        return error


def _target_id(target: Actor | str) -> str:
    return target.id if isinstance(target, Actor) else target
