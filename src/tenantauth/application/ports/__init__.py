"""Application ports - interfaces for external adapters."""

from tenantauth.application.ports.permission_checker import PermissionChecker
from tenantauth.application.ports.resource_policy import ResourcePolicy
from tenantauth.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "ResourcePolicy",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
