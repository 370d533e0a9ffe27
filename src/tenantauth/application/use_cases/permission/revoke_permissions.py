"""Revoke permissions use case."""

from collections.abc import Iterable

from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.application.use_cases.permission.grant_policy import ensure_can_grant
from tenantauth.domain.entities import Actor, AuditEntry
from tenantauth.domain.exceptions import NotFound
from tenantauth.domain.value_objects import PermissionName


class RevokePermissionsUseCase:
    """Remove explicit permissions from a user. Role permissions are unaffected."""

    def __init__(self, unit_of_work_factory: type, audit_recorder: AuditRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_recorder

    async def execute(
        self, actor_id: str, user_id: str, permissions: Iterable[PermissionName | str]
    ) -> Actor:
        permissions = PermissionName.parse_many(permissions)
        async with self._uow_factory() as uow:
            revoker = await uow.users.get_by_id(actor_id)
            if not revoker:
                raise NotFound("User", actor_id)
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)
            ensure_can_grant(revoker, user)

            updated = user.with_permissions(user.permissions - set(permissions))
            await uow.users.update_access(updated)

        await self._audit.record(
            AuditEntry.new(
                user_id,
                True,
                permission=permissions[0].value if permissions else None,
                action="permissions_revoked",
                resource_type="user",
                resource_id=user_id,
                context={
                    "permissions": [p.value for p in permissions],
                    "revoked_by": actor_id,
                },
            )
        )
        return updated
