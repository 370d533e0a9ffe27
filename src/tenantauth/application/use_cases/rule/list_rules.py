"""List permission rules use case."""

from tenantauth.domain.entities import PermissionRule


class ListRulesUseCase:
    """List stored rules, optionally filtered by resource type and action."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, resource_type: str | None = None, action: str | None = None
    ) -> list[PermissionRule]:
        async with self._uow_factory() as uow:
            return await uow.rules.list(resource_type=resource_type, action=action)
