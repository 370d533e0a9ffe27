"""Domain exceptions."""

from collections.abc import Iterable
from enum import StrEnum


class TenantAuthError(Exception):
    """Base exception for tenantauth."""

    pass


class NotFound(TenantAuthError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        message = f"{entity} not found" if identifier is None else f"{entity} {identifier} not found"
        super().__init__(message)


class ValidationError(TenantAuthError):
    """Validation failed for input data (unknown role, permission, operator...)."""

    pass


class ErrorKind(StrEnum):
    """Kinds of authorization failure."""

    INVALID_INPUT = "INVALID_INPUT"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INACTIVE_ACTOR = "INACTIVE_ACTOR"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    ROLE_DENIED = "INSUFFICIENT_ROLE"
    RESOURCE_ACCESS_DENIED = "RESOURCE_ACCESS_DENIED"


class AuthorizationError(TenantAuthError):
    """Access was refused. Carries a kind, a machine-readable code and a status code."""

    kind: ErrorKind = ErrorKind.PERMISSION_DENIED
    status_code: int = 403

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return self.kind.value

    def details(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        """Render as a JSON-safe payload for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "status": self.status_code,
            **self.details(),
        }


class Unauthenticated(AuthorizationError):
    """No actor is attached to the request."""

    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401


class InactiveActor(AuthorizationError):
    """Actor account is deactivated."""

    kind = ErrorKind.INACTIVE_ACTOR

    def __init__(self, message: str = "Access denied: User account is inactive") -> None:
        super().__init__(message)


class PermissionDenied(AuthorizationError):
    """User does not have permission for the requested action."""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, message: str, permissions: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.permissions = [str(p) for p in permissions]

    def details(self) -> dict:
        return {"permissions": self.permissions} if self.permissions else {}


class RoleDenied(AuthorizationError):
    """Actor role is not one of the required roles."""

    kind = ErrorKind.ROLE_DENIED

    def __init__(self, message: str, required_roles: Iterable[str], actual_role: str) -> None:
        super().__init__(message)
        self.required_roles = [str(r) for r in required_roles]
        self.actual_role = str(actual_role)

    def details(self) -> dict:
        return {"required_roles": self.required_roles, "actual_role": self.actual_role}


class ResourceAccessDenied(AuthorizationError):
    """Actor may not act on a specific resource."""

    kind = ErrorKind.RESOURCE_ACCESS_DENIED

    def __init__(self, message: str, resource_type: str, resource_id: str | None = None) -> None:
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id

    def details(self) -> dict:
        return {"resource_type": self.resource_type, "resource_id": self.resource_id}
