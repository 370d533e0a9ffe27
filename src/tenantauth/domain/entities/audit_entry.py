"""Audit entry entity - immutable record of one authorization decision."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class AuditEntry:
    """Append-only audit record."""

    id: UUID
    user_id: str
    result: bool
    timestamp: datetime
    permission: str | None = None
    action: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    reason: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def new(cls, user_id: str, result: bool, **kwargs: Any) -> "AuditEntry":
        """Create an entry stamped with a fresh id and the current time."""
        return cls(id=uuid4(), user_id=user_id, result=result, timestamp=datetime.now(UTC), **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "permission": self.permission,
            "action": self.action,
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "result": self.result,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }
