"""Domain entities."""

from tenantauth.domain.entities.actor import Actor
from tenantauth.domain.entities.audit_entry import AuditEntry
from tenantauth.domain.entities.inherited_permission import InheritedPermission
from tenantauth.domain.entities.permission_context import (
    EnvironmentInfo,
    PermissionContext,
    RequestInfo,
    ResourceRef,
)
from tenantauth.domain.entities.permission_rule import PermissionCondition, PermissionRule
from tenantauth.domain.entities.permission_template import PermissionTemplate

__all__ = [
    "Actor",
    "AuditEntry",
    "EnvironmentInfo",
    "InheritedPermission",
    "PermissionCondition",
    "PermissionContext",
    "PermissionRule",
    "PermissionTemplate",
    "RequestInfo",
    "ResourceRef",
]
