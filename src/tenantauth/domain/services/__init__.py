"""Pure authorization logic - role catalog, permission evaluator, rule engine."""

from tenantauth.domain.services.effective_permissions import (
    effective_permissions,
    inherited_permissions,
    permission_source,
)
from tenantauth.domain.services.permission_evaluator import (
    can_access_company,
    can_access_owned_resource,
    can_manage_user,
    can_view_user_data,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from tenantauth.domain.services.role_catalog import (
    DEFAULT_ROLE_CATALOG,
    RoleCatalog,
    assignable_roles,
    can_assign_role,
    is_higher_role,
    role_level,
    role_permissions,
)
from tenantauth.domain.services.rule_engine import (
    ConditionLimits,
    applicable_rules,
    evaluate_condition,
    evaluate_rule,
)

__all__ = [
    "DEFAULT_ROLE_CATALOG",
    "ConditionLimits",
    "RoleCatalog",
    "applicable_rules",
    "assignable_roles",
    "can_access_company",
    "can_access_owned_resource",
    "can_assign_role",
    "can_manage_user",
    "can_view_user_data",
    "effective_permissions",
    "evaluate_condition",
    "evaluate_rule",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "inherited_permissions",
    "is_higher_role",
    "permission_source",
    "role_level",
    "role_permissions",
]
