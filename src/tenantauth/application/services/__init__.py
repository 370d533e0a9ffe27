"""Application services - guard, audit recorder, resource policy."""

from tenantauth.application.services.access_guard import AccessGuard
from tenantauth.application.services.audit_recorder import AuditRecorder
from tenantauth.application.services.resource_policy import RuleBasedResourcePolicy

__all__ = [
    "AccessGuard",
    "AuditRecorder",
    "RuleBasedResourcePolicy",
]
