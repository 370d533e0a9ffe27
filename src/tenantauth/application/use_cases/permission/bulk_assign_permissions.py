"""Bulk assign permissions use case."""

from collections.abc import Iterable

from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.application.use_cases.permission.grant_policy import ensure_can_grant
from tenantauth.domain.entities import Actor, AuditEntry
from tenantauth.domain.exceptions import NotFound
from tenantauth.domain.value_objects import PermissionName


class BulkAssignPermissionsUseCase:
    """Union the same permissions into many users in one transaction."""

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(
        self,
        actor_id: str,
        user_ids: list[str],
        permissions: Iterable[PermissionName | str],
    ) -> list[Actor]:
        permissions = PermissionName.parse_many(permissions)
        async with self._uow_factory() as uow:
            assigner = await uow.users.get_by_id(actor_id)
            if not assigner:
                raise NotFound("User", actor_id)
            ensure_can_grant(assigner, permissions=permissions)

            updated: list[Actor] = []
            for user_id in user_ids:
                user = await uow.users.get_by_id(user_id)
                if not user:
                    raise NotFound("User", user_id)
                ensure_can_grant(assigner, user, permissions)
                changed = user.with_permissions(user.permissions | set(permissions))
                await uow.users.update_access(changed)
                updated.append(changed)

        for user in updated:
            await self._audit.record(
                AuditEntry.new(
                    user.id,
                    True,
                    permission=permissions[0].value if permissions else None,
                    action="bulk_permissions_assigned",
                    resource_type="user",
                    resource_id=user.id,
                    context={
                        "permissions": [p.value for p in permissions],
                        "assigned_by": actor_id,
                    },
                )
            )
        return updated
