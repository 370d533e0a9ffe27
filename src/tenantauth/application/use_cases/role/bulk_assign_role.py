"""Bulk assign role use case."""

from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.domain.entities import Actor, AuditEntry
from tenantauth.domain.exceptions import NotFound, PermissionDenied, ValidationError
from tenantauth.domain.services import can_assign_role, role_permissions
from tenantauth.domain.value_objects import COMPANY_ROLES, UserRole


class BulkAssignRoleUseCase:
    """Assign the same role to many users in one transaction.

    Every user is checked before anything is written back, so one refused user
    fails the whole batch.
    """

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(self, actor_id: str, user_ids: list[str], role: UserRole | str) -> list[Actor]:
        role = UserRole.parse(role)
        async with self._uow_factory() as uow:
            assigner = await uow.users.get_by_id(actor_id)
            if not assigner:
                raise NotFound("User", actor_id)

            users: list[Actor] = []
            for user_id in user_ids:
                user = await uow.users.get_by_id(user_id)
                if not user:
                    raise NotFound("User", user_id)
                if not can_assign_role(assigner, role, user.company_id):
                    raise PermissionDenied(f"Insufficient permissions to assign this role to {user_id}")
                if role in COMPANY_ROLES and not user.company_id:
                    raise ValidationError(f"Company ID is required for company roles ({user_id})")
                users.append(user)

            updated = [u.with_role(role, role_permissions(role)) for u in users]
            for changed in updated:
                await uow.users.update_access(changed)

        for user in updated:
            await self._audit.record(
                AuditEntry.new(
                    user.id,
                    True,
                    action="bulk_role_assigned",
                    resource_type="user",
                    resource_id=user.id,
                    context={"new_role": role.value, "assigned_by": actor_id},
                )
            )
        return updated
