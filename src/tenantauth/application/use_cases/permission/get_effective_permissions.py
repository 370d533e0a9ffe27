"""Get effective permissions use case."""

from tenantauth.application.dto.permission_dto import EffectivePermissionsOutput
from tenantauth.domain.exceptions import NotFound
from tenantauth.domain.services import effective_permissions, inherited_permissions


class GetEffectivePermissionsUseCase:
    """Effective permission set and provenance for a stored user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str) -> EffectivePermissionsOutput:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)

        return EffectivePermissionsOutput(
            user_id=user.id,
            permissions=sorted(effective_permissions(user)),
            inherited=inherited_permissions(user),
        )
