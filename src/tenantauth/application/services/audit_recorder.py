"""Audit recorder - fire-and-forget append of authorization decisions."""

import logging

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.domain.entities import AuditEntry

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Writes audit entries through the unit of work.

    A failed write is logged and dropped; it never changes or blocks the
    decision being recorded.
    """

    def __init__(self, unit_of_work_factory: type, enabled: bool = True) -> None:
        self._uow_factory = unit_of_work_factory
        self._enabled = enabled

    async def record(self, entry: AuditEntry) -> None:
        """Append entry in its own transaction. Never raises."""
        if not self._enabled:
            return
        try:
            async with self._uow_factory() as uow:
                await uow.audit.append(entry)
        except Exception:
            logger.exception(
                "Failed to record audit entry %s (user=%s result=%s)",
                entry.id,
                entry.user_id,
                entry.result,
            )

    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        """Read path for operators. Storage errors propagate."""
        async with self._uow_factory() as uow:
            return await uow.audit.query(query)
