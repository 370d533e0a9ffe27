"""Audit query DTO."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class AuditQuery:
    """Filters for reading the audit log. None means no filter."""

    user_id: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    result: bool | None = None
    permission: str | None = None
    limit: int = 100

    def for_user(self, user_id: str) -> "AuditQuery":
        return replace(self, user_id=user_id)
