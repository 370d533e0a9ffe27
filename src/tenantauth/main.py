"""Application entry point and composition root."""

import argparse
import json
import logging
import sys
from pathlib import Path

import falcon.asgi

from tenantauth import __version__
from tenantauth.application.dto.permission_dto import EffectivePermissionsOutput
from tenantauth.application.services import AccessGuard, AuditRecorder, RuleBasedResourcePolicy
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
from tenantauth.config import Settings, get_settings
from tenantauth.domain.entities import Actor, PermissionContext, PermissionRule
from tenantauth.domain.exceptions import TenantAuthError
from tenantauth.domain.services import (
    ConditionLimits,
    effective_permissions,
    evaluate_rule,
    inherited_permissions,
)
from tenantauth.infrastructure.auth.keycloak_provider import KeycloakProvider
from tenantauth.infrastructure.permission.permission_checker import TenantAuthPermissionChecker
from tenantauth.infrastructure.persistence.postgres.connection import (
    create_pool,
    pool_readiness,
)
from tenantauth.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from tenantauth.interfaces.api.errors import register_error_handlers
from tenantauth.interfaces.api.middleware.auth import AuthMiddleware
from tenantauth.interfaces.api.middleware.cors import CORSMiddleware
from tenantauth.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def condition_limits(settings: Settings) -> ConditionLimits:
    return ConditionLimits(
        max_pattern_length=settings.regex_max_pattern_length,
        max_input_length=settings.regex_max_input_length,
    )


def create_tenantauth_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url, min_size=settings.pool_min_size, max_size=settings.pool_max_size
    )
    uow_factory = create_uow_factory(pool)
    limits = condition_limits(settings)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET is not set; all requests are unauthenticated")

    audit_recorder = AuditRecorder(uow_factory, enabled=settings.audit_enabled)
    resource_policy = RuleBasedResourcePolicy(uow_factory, limits)
    permission_checker = TenantAuthPermissionChecker(
        uow_factory, audit_recorder, resource_policy, limits=limits
    )
    guard = AccessGuard(permission_checker, audit_recorder)

    get_effective = GetEffectivePermissionsUseCase(unit_of_work_factory=uow_factory)
    assign_permissions = AssignPermissionsUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    revoke_permissions = RevokePermissionsUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    bulk_assign_permissions = BulkAssignPermissionsUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    update_role = UpdateUserRoleUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    bulk_assign_role = BulkAssignRoleUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    apply_template = ApplyTemplateUseCase(
        unit_of_work_factory=uow_factory, assign_permissions=assign_permissions
    )
    list_templates = ListTemplatesUseCase(unit_of_work_factory=uow_factory)
    create_template = CreateTemplateUseCase(unit_of_work_factory=uow_factory)
    list_rules = ListRulesUseCase(unit_of_work_factory=uow_factory)
    create_rule = CreateRuleUseCase(unit_of_work_factory=uow_factory)
    update_rule = UpdateRuleUseCase(unit_of_work_factory=uow_factory)
    delete_rule = DeleteRuleUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )
    evaluate_stored_rule = EvaluateRuleUseCase(
        unit_of_work_factory=uow_factory, permission_checker=permission_checker
    )
    query_audit = QueryAuditLogUseCase(
        unit_of_work_factory=uow_factory, audit_recorder=audit_recorder
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, uow_factory),
        ],
    )
    register_error_handlers(app)

    health_resource = HealthResource(pool_readiness(pool))
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/me/permissions", MyPermissionsResource(get_effective))
    app.add_route(
        "/v1/users/{user_id}/permissions",
        UserPermissionsResource(guard, get_effective, assign_permissions, revoke_permissions),
    )
    app.add_route("/v1/users/{user_id}/role", UserRoleResource(guard, update_role))
    app.add_route(
        "/v1/users/{user_id}/templates/{template_id}",
        UserTemplateResource(guard, apply_template),
    )
    app.add_route("/v1/bulk/role", BulkRoleResource(guard, bulk_assign_role))
    app.add_route(
        "/v1/bulk/permissions", BulkPermissionsResource(guard, bulk_assign_permissions)
    )
    app.add_route("/v1/rules", RulesResource(guard, list_rules, create_rule))
    app.add_route(
        "/v1/rules/{rule_id}", RuleResource(guard, uow_factory, update_rule, delete_rule)
    )
    app.add_route(
        "/v1/rules/{rule_id}/evaluate", RuleEvaluateResource(guard, evaluate_stored_rule)
    )
    app.add_route("/v1/templates", TemplatesResource(guard, list_templates, create_template))
    app.add_route("/v1/audit", AuditResource(guard, query_audit))
    app.add_route("/v1/roles/assignable", AssignableRolesResource())

    return app


def run_server(settings: Settings) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_tenantauth_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def _load_json(path: str) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SystemExit(f"{path}: expected a JSON object")
    return data


def _cmd_evaluate_rule(args: argparse.Namespace, settings: Settings) -> int:
    rule = PermissionRule.from_dict(_load_json(args.rule))
    context = PermissionContext.from_dict(_load_json(args.context))
    result = evaluate_rule(rule, context, condition_limits(settings))
    print(json.dumps({"rule": rule.name, "effect": rule.effect.value, "result": result}))
    return 0 if result else 1


def _cmd_effective_permissions(args: argparse.Namespace, settings: Settings) -> int:
    actor = Actor.from_dict(_load_json(args.actor))
    output = EffectivePermissionsOutput(
        user_id=actor.id,
        permissions=sorted(effective_permissions(actor)),
        inherited=inherited_permissions(actor),
    )
    print(json.dumps(output.to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tenantauth", description="TenantAuth authorization engine")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("version", help="Print version")

    evaluate = sub.add_parser("evaluate-rule", help="Evaluate a rule file against a context file")
    evaluate.add_argument("--rule", required=True, help="Rule JSON file")
    evaluate.add_argument("--context", required=True, help="Context JSON file (with a user)")

    effective = sub.add_parser(
        "effective-permissions", help="Print effective permissions of an actor file"
    )
    effective.add_argument("--actor", required=True, help="Actor JSON file")

    sub.add_parser("serve", help="Run the HTTP API")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command in (None, "version"):
        print(f"TenantAuth v{__version__}")
        return 0
    if args.command == "serve":
        run_server(settings)
        return 0

    handlers = {
        "evaluate-rule": _cmd_evaluate_rule,
        "effective-permissions": _cmd_effective_permissions,
    }
    try:
        return handlers[args.command](args, settings)
    except (TenantAuthError, KeyError, OSError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
