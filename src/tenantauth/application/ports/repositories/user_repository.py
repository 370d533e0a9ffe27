"""User repository port."""

from typing import Protocol

from tenantauth.domain.entities import Actor


class UserRepository(Protocol):
    """Port for reading user snapshots and writing role/permission changes."""

    async def get_by_id(self, user_id: str) -> Actor | None: ...

    async def update_access(self, actor: Actor) -> None: ...
