"""Permission rule repository port."""

from typing import Protocol
from uuid import UUID

from tenantauth.domain.entities import PermissionRule


class RuleRepository(Protocol):
    """Port for ABAC rule persistence."""

    async def get_by_id(self, rule_id: UUID) -> PermissionRule | None: ...

    async def list(
        self,
        *,
        resource_type: str | None = None,
        action: str | None = None,
    ) -> list[PermissionRule]: ...

    async def create(self, rule: PermissionRule) -> PermissionRule: ...

    async def update(self, rule: PermissionRule) -> None: ...

    async def delete(self, rule_id: UUID) -> None: ...
