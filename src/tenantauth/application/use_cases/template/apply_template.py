"""Apply permission template use case."""

from uuid import UUID

from tenantauth.application.use_cases.permission.assign_permissions import (
    AssignPermissionsUseCase,
)
from tenantauth.domain.entities import Actor
from tenantauth.domain.exceptions import NotFound


class ApplyTemplateUseCase:
    """Union a template's permissions into a user's explicit permissions."""

    def __init__(
        self, unit_of_work_factory: type, assign_permissions: AssignPermissionsUseCase
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._assign = assign_permissions

    async def execute(self, actor_id: str, user_id: str, template_id: UUID) -> Actor:
        async with self._uow_factory() as uow:
            template = await uow.templates.get_by_id(template_id)
            if not template:
                raise NotFound("Template", str(template_id))
        return await self._assign.execute(
            actor_id,
            user_id,
            sorted(template.permissions),
            audit_action="template_applied",
        )
