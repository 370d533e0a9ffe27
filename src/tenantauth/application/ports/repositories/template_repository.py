"""Permission template repository port."""

from typing import Protocol
from uuid import UUID

from tenantauth.domain.entities import PermissionTemplate


class TemplateRepository(Protocol):
    """Port for permission template persistence."""

    async def get_by_id(self, template_id: UUID) -> PermissionTemplate | None: ...

    async def list_all(self) -> list[PermissionTemplate]: ...

    async def create(self, template: PermissionTemplate) -> PermissionTemplate: ...
