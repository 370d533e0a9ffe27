"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from tenantauth.application.ports.repositories.audit_repository import AuditRepository
from tenantauth.application.ports.repositories.rule_repository import RuleRepository
from tenantauth.application.ports.repositories.template_repository import (
    TemplateRepository,
)
from tenantauth.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def rules(self) -> RuleRepository: ...

    @property
    def templates(self) -> TemplateRepository: ...

    @property
    def audit(self) -> AuditRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
