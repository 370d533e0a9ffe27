"""Repository ports."""

from tenantauth.application.ports.repositories.audit_repository import AuditRepository
from tenantauth.application.ports.repositories.rule_repository import RuleRepository
from tenantauth.application.ports.repositories.template_repository import (
    TemplateRepository,
)
from tenantauth.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "AuditRepository",
    "RuleRepository",
    "TemplateRepository",
    "UserRepository",
]
