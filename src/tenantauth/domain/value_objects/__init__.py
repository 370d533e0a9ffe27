"""Domain value objects."""

from tenantauth.domain.value_objects.permission_name import PermissionName
from tenantauth.domain.value_objects.permission_source import PermissionSource
from tenantauth.domain.value_objects.rule_vocabulary import (
    ConditionOperator,
    LogicalOperator,
    RuleEffect,
)
from tenantauth.domain.value_objects.subscription_tier import SubscriptionTier
from tenantauth.domain.value_objects.user_role import COMPANY_ROLES, UserRole

__all__ = [
    "COMPANY_ROLES",
    "ConditionOperator",
    "LogicalOperator",
    "PermissionName",
    "PermissionSource",
    "RuleEffect",
    "SubscriptionTier",
    "UserRole",
]
