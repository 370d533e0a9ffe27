"""List permission templates use case."""

from tenantauth.domain.entities import PermissionTemplate


class ListTemplatesUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[PermissionTemplate]:
        async with self._uow_factory() as uow:
            return await uow.templates.list_all()
