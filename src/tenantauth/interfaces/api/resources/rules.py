"""ABAC rule administration resources."""

import falcon
import falcon.asgi

from tenantauth.application.services import AccessGuard
from tenantauth.application.use_cases.rule.create_rule import CreateRuleUseCase
from tenantauth.application.use_cases.rule.delete_rule import DeleteRuleUseCase
from tenantauth.application.use_cases.rule.evaluate_rule import EvaluateRuleUseCase
from tenantauth.application.use_cases.rule.list_rules import ListRulesUseCase
from tenantauth.application.use_cases.rule.update_rule import UpdateRuleUseCase
from tenantauth.domain.entities import Actor, PermissionContext
from tenantauth.domain.exceptions import NotFound, ValidationError
from tenantauth.domain.value_objects import PermissionName
from tenantauth.interfaces.api.hooks import current_actor, require_permission
from tenantauth.interfaces.api.resources._body import json_body
from tenantauth.interfaces.api.resources.users import parse_uuid

_MANAGE = require_permission(PermissionName.MANAGE_PLATFORM)


class RulesResource:
    """GET/POST /v1/rules."""

    def __init__(
        self, guard: AccessGuard, list_rules: ListRulesUseCase, create_rule: CreateRuleUseCase
    ) -> None:
        self.guard = guard
        self._list = list_rules
        self._create = create_rule

    @falcon.before(_MANAGE)
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List rules, optionally filtered by ?resource_type= and ?action=."""
        rules = await self._list.execute(
            resource_type=req.get_param("resource_type"),
            action=req.get_param("action"),
        )
        resp.media = {"items": [r.to_dict() for r in rules]}
        resp.status = falcon.HTTP_200

    @falcon.before(_MANAGE)
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await json_body(req)
        rule = await self._create.execute(current_actor(req).id, body)
        resp.media = rule.to_dict()
        resp.status = falcon.HTTP_201


class RuleResource:
    """GET/PUT/DELETE /v1/rules/{rule_id}."""

    def __init__(
        self,
        guard: AccessGuard,
        unit_of_work_factory: type,
        update_rule: UpdateRuleUseCase,
        delete_rule: DeleteRuleUseCase,
    ) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory
        self._update = update_rule
        self._delete = delete_rule

    @falcon.before(_MANAGE)
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, rule_id: str
    ) -> None:
        rid = parse_uuid(rule_id, "rule")
        async with self._uow_factory() as uow:
            rule = await uow.rules.get_by_id(rid)
        if not rule:
            raise NotFound("Rule", rule_id)
        resp.media = rule.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(_MANAGE)
    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, rule_id: str
    ) -> None:
        body = await json_body(req)
        rule = await self._update.execute(
            current_actor(req).id, parse_uuid(rule_id, "rule"), body
        )
        resp.media = rule.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(_MANAGE)
    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, rule_id: str
    ) -> None:
        await self._delete.execute(current_actor(req).id, parse_uuid(rule_id, "rule"))
        resp.status = falcon.HTTP_204


class RuleEvaluateResource:
    """POST /v1/rules/{rule_id}/evaluate - dry-run a rule against a context.

    Body is a context object. Without a "user" key the caller is evaluated.
    """

    def __init__(self, guard: AccessGuard, evaluate_rule: EvaluateRuleUseCase) -> None:
        self.guard = guard
        self._evaluate = evaluate_rule

    @falcon.before(_MANAGE)
    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, rule_id: str
    ) -> None:
        body = await json_body(req)
        user: Actor | None = None if body.get("user") else current_actor(req)
        try:
            context = PermissionContext.from_dict(body, user=user)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ValidationError(f"Invalid evaluation context: {e}") from None
        result = await self._evaluate.execute(parse_uuid(rule_id, "rule"), context)
        resp.media = {"rule_id": rule_id, "result": result}
        resp.status = falcon.HTTP_200
