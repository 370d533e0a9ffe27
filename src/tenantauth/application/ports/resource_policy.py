"""Resource policy port - static + rule based access to one resource."""

from typing import Protocol

from tenantauth.domain.entities import Actor, PermissionContext


class ResourcePolicy(Protocol):
    """Decides whether actor may perform action on a resource."""

    async def can_access(
        self,
        actor: Actor,
        resource_type: str,
        resource_id: str,
        action: str,
        context: PermissionContext | None = None,
    ) -> bool: ...
