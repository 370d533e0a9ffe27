"""Application DTOs."""

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.application.dto.permission_dto import EffectivePermissionsOutput

__all__ = ["AuditQuery", "EffectivePermissionsOutput"]
