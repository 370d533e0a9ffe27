"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from tenantauth.application.use_cases.audit.query_audit_log import QueryAuditLogUseCase
from tenantauth.application.use_cases.permission.assign_permissions import (
    AssignPermissionsUseCase,
)
from tenantauth.application.use_cases.permission.bulk_assign_permissions import (
    BulkAssignPermissionsUseCase,
)
from tenantauth.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from tenantauth.application.use_cases.permission.revoke_permissions import (
    RevokePermissionsUseCase,
)
from tenantauth.application.use_cases.role.bulk_assign_role import BulkAssignRoleUseCase
from tenantauth.application.use_cases.role.update_user_role import UpdateUserRoleUseCase
from tenantauth.application.use_cases.rule.create_rule import CreateRuleUseCase
from tenantauth.application.use_cases.rule.delete_rule import DeleteRuleUseCase
from tenantauth.application.use_cases.rule.evaluate_rule import EvaluateRuleUseCase
from tenantauth.application.use_cases.rule.list_rules import ListRulesUseCase
from tenantauth.application.use_cases.rule.update_rule import UpdateRuleUseCase
from tenantauth.application.use_cases.template.apply_template import ApplyTemplateUseCase
from tenantauth.application.use_cases.template.create_template import CreateTemplateUseCase
from tenantauth.application.use_cases.template.list_templates import ListTemplatesUseCase
from tenantauth.infrastructure.auth.keycloak_provider import TokenIdentity
from tenantauth.interfaces.api.errors import register_error_handlers
from tenantauth.interfaces.api.middleware.auth import AuthMiddleware
from tenantauth.interfaces.api.resources.audit import AuditResource
from tenantauth.interfaces.api.resources.health import HealthResource
from tenantauth.interfaces.api.resources.permissions import (
    BulkPermissionsResource,
    MyPermissionsResource,
    UserPermissionsResource,
)
from tenantauth.interfaces.api.resources.roles import AssignableRolesResource
from tenantauth.interfaces.api.resources.rules import (
    RuleEvaluateResource,
    RuleResource,
    RulesResource,
)
from tenantauth.interfaces.api.resources.templates import TemplatesResource
from tenantauth.interfaces.api.resources.users import (
    BulkRoleResource,
    UserRoleResource,
    UserTemplateResource,
)

from tests.conftest import make_actor


class FakeKeycloakProvider:
    """Treats the bearer token as the subject id; "invalid" is rejected."""

    def decode_token(self, token: str) -> TokenIdentity | None:
        if token == "invalid":
            return None
        return TokenIdentity(subject=token)


@pytest.fixture
def seeded_uow(fake_uow):
    """Users across two companies plus a platform admin and a deactivated user."""
    fake_uow.users.add(
        make_actor(id="root", role="SUPER_ADMIN", company_id=None),
        make_actor(id="admin1", role="COMPANY_ADMIN", company_id="C1"),
        make_actor(id="mgr1", role="COMPANY_MANAGER", company_id="C1"),
        make_actor(id="user1", role="COMPANY_USER", company_id="C1"),
        make_actor(id="user2", role="COMPANY_USER", company_id="C2"),
        make_actor(id="gone", role="COMPANY_ADMIN", company_id="C1", is_active=False),
    )
    return fake_uow


@pytest.fixture
def app(seeded_uow, uow_factory, audit_recorder, permission_checker, guard):
    """Falcon ASGI app wired over the in-memory unit of work."""
    get_effective = GetEffectivePermissionsUseCase(unit_of_work_factory=uow_factory)
    assign = AssignPermissionsUseCase(uow_factory, audit_recorder)
    revoke = RevokePermissionsUseCase(uow_factory, audit_recorder)

    app = falcon.asgi.App(middleware=[AuthMiddleware(FakeKeycloakProvider(), uow_factory)])
    register_error_handlers(app)

    health = HealthResource()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/me/permissions", MyPermissionsResource(get_effective))
    app.add_route(
        "/v1/users/{user_id}/permissions",
        UserPermissionsResource(guard, get_effective, assign, revoke),
    )
    app.add_route(
        "/v1/users/{user_id}/role",
        UserRoleResource(guard, UpdateUserRoleUseCase(uow_factory, audit_recorder)),
    )
    app.add_route(
        "/v1/users/{user_id}/templates/{template_id}",
        UserTemplateResource(guard, ApplyTemplateUseCase(uow_factory, assign)),
    )
    app.add_route(
        "/v1/bulk/role", BulkRoleResource(guard, BulkAssignRoleUseCase(uow_factory, audit_recorder))
    )
    app.add_route(
        "/v1/bulk/permissions",
        BulkPermissionsResource(guard, BulkAssignPermissionsUseCase(uow_factory, audit_recorder)),
    )
    app.add_route(
        "/v1/rules",
        RulesResource(guard, ListRulesUseCase(uow_factory), CreateRuleUseCase(uow_factory)),
    )
    app.add_route(
        "/v1/rules/{rule_id}",
        RuleResource(
            guard,
            uow_factory,
            UpdateRuleUseCase(uow_factory),
            DeleteRuleUseCase(uow_factory, audit_recorder),
        ),
    )
    app.add_route(
        "/v1/rules/{rule_id}/evaluate",
        RuleEvaluateResource(guard, EvaluateRuleUseCase(uow_factory, permission_checker)),
    )
    app.add_route(
        "/v1/templates",
        TemplatesResource(
            guard, ListTemplatesUseCase(uow_factory), CreateTemplateUseCase(uow_factory)
        ),
    )
    app.add_route(
        "/v1/audit", AuditResource(guard, QueryAuditLogUseCase(uow_factory, audit_recorder))
    )
    app.add_route("/v1/roles/assignable", AssignableRolesResource())
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
