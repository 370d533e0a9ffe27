"""Audit repository port."""

from typing import Protocol

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.domain.entities import AuditEntry


class AuditRepository(Protocol):
    """Port for the append-only audit log. Each append must be atomic."""

    async def append(self, entry: AuditEntry) -> None: ...

    async def query(self, query: AuditQuery) -> list[AuditEntry]: ...
