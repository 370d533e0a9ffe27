"""Create permission template use case."""

from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import uuid4

from tenantauth.domain.entities import PermissionTemplate
from tenantauth.domain.exceptions import NotFound, PermissionDenied, ValidationError
from tenantauth.domain.services import has_permission
from tenantauth.domain.value_objects import PermissionName


class CreateTemplateUseCase:
    """Store a named bundle of permissions."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: str,
        name: str,
        permissions: Iterable[PermissionName | str],
        description: str | None = None,
    ) -> PermissionTemplate:
        """Create template. Actor must hold manage_platform."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Template name is required")
        permissions = frozenset(PermissionName.parse_many(permissions))

        async with self._uow_factory() as uow:
            creator = await uow.users.get_by_id(actor_id)
            if not creator:
                raise NotFound("User", actor_id)
            if not has_permission(creator, PermissionName.MANAGE_PLATFORM):
                raise PermissionDenied(
                    "Insufficient permissions to create permission templates",
                    [PermissionName.MANAGE_PLATFORM],
                )
            template = PermissionTemplate(
                id=uuid4(),
                name=name,
                description=description,
                permissions=permissions,
                created_by=actor_id,
                created_at=datetime.now(UTC),
            )
            await uow.templates.create(template)
        return template
