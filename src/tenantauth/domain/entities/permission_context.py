"""Permission context - everything a rule condition may look at."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from tenantauth.domain.entities.actor import Actor


@dataclass(frozen=True)
class ResourceRef:
    """Resource targeted by an operation."""

    id: str
    type: str
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EnvironmentInfo:
    """Where and when the request happens."""

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    ip_address: str | None = None
    user_agent: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class RequestInfo:
    """Request metadata."""

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class PermissionContext:
    """Snapshot built fresh for each evaluation."""

    user: Actor
    resource: ResourceRef | None = None
    environment: EnvironmentInfo | None = None
    request: RequestInfo | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], user: Actor | None = None) -> "PermissionContext":
        """Build from JSON. user overrides data["user"] when given."""
        if user is None:
            user = Actor.from_dict(data["user"])
        resource = data.get("resource")
        environment = data.get("environment")
        request = data.get("request")
        return cls(
            user=user,
            resource=(
                ResourceRef(
                    id=str(resource.get("id", "")),
                    type=str(resource.get("type", "")),
                    attributes=dict(resource.get("attributes") or {}),
                )
                if resource
                else None
            ),
            environment=(
                EnvironmentInfo(
                    timestamp=(
                        datetime.fromisoformat(environment["timestamp"])
                        if environment.get("timestamp")
                        else datetime.now(UTC)
                    ),
                    ip_address=environment.get("ip_address"),
                    user_agent=environment.get("user_agent"),
                    location=environment.get("location"),
                )
                if environment
                else None
            ),
            request=(
                RequestInfo(
                    method=str(request.get("method", "")),
                    path=str(request.get("path", "")),
                    headers=dict(request.get("headers") or {}),
                    body=request.get("body"),
                )
                if request
                else None
            ),
        )

    def snapshot(self) -> dict[str, Any]:
        """JSON-safe summary stored alongside audit entries."""
        data: dict[str, Any] = {
            "user_role": self.user.role.value,
            "user_company": self.user.company_id,
        }
        if self.resource:
            data["resource"] = {"id": self.resource.id, "type": self.resource.type}
        if self.environment:
            data["ip_address"] = self.environment.ip_address
        if self.request:
            data["request"] = {"method": self.request.method, "path": self.request.path}
        return data
