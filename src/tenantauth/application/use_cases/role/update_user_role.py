"""Update user role use case."""

from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.domain.entities import Actor, AuditEntry
from tenantauth.domain.exceptions import NotFound, PermissionDenied, ValidationError
from tenantauth.domain.services import can_assign_role, role_permissions
from tenantauth.domain.value_objects import COMPANY_ROLES, UserRole


class UpdateUserRoleUseCase:
    """Change a user's role. Explicit permissions are reset to the new role's base set."""

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(self, actor_id: str, user_id: str, new_role: UserRole | str) -> Actor:
        """Assign new_role to user. Actor must be allowed to assign it in the user's company."""
        new_role = UserRole.parse(new_role)
        async with self._uow_factory() as uow:
            assigner = await uow.users.get_by_id(actor_id)
            if not assigner:
                raise NotFound("User", actor_id)
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)

            if not can_assign_role(assigner, new_role, user.company_id):
                raise PermissionDenied("Insufficient permissions to assign this role")
            if new_role in COMPANY_ROLES and not user.company_id:
                raise ValidationError("Company ID is required for company roles")

            updated = user.with_role(new_role, role_permissions(new_role))
            await uow.users.update_access(updated)

        await self._audit.record(
            AuditEntry.new(
                user_id,
                True,
                action="role_updated",
                resource_type="user",
                resource_id=user_id,
                context={
                    "old_role": user.role.value,
                    "new_role": new_role.value,
                    "updated_by": actor_id,
                },
            )
        )
        return updated
