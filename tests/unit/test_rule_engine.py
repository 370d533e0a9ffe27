"""Unit tests for ABAC rule evaluation."""

from uuid import uuid4

import pytest

from tenantauth.domain.entities import (
    PermissionCondition,
    PermissionContext,
    PermissionRule,
    ResourceRef,
)
from tenantauth.domain.exceptions import ValidationError
from tenantauth.domain.services import ConditionLimits, applicable_rules, evaluate_condition, evaluate_rule
from tenantauth.domain.value_objects import ConditionOperator, LogicalOperator, RuleEffect

from tests.conftest import make_actor


def _context(role: str = "COMPANY_ADMIN", **attributes) -> PermissionContext:
    return PermissionContext(
        user=make_actor(role=role),
        resource=ResourceRef(id="doc-1", type="document", attributes=attributes),
    )


def _cond(field: str, operator: str, value=None, logical: str = "AND") -> PermissionCondition:
    return PermissionCondition(
        field=field,
        operator=ConditionOperator.parse(operator),
        value=value,
        logical_operator=LogicalOperator.parse(logical),
    )


def _rule(conditions, effect: str = "allow", **kwargs) -> PermissionRule:
    return PermissionRule(
        id=uuid4(),
        name="test",
        resource_type=kwargs.pop("resource_type", "document"),
        action=kwargs.pop("action", "read"),
        effect=RuleEffect.parse(effect),
        conditions=list(conditions),
        **kwargs,
    )


class TestCompanyAdminRule:
    RULE = _rule(
        [
            _cond("user.role", "equals", "COMPANY_ADMIN"),
            _cond("resource.attributes.companyId", "equals", "C1", "AND"),
        ]
    )

    def test_matching_context(self) -> None:
        assert evaluate_rule(self.RULE, _context(companyId="C1")) is True

    def test_mismatched_company(self) -> None:
        assert evaluate_rule(self.RULE, _context(companyId="C2")) is False


def test_empty_allow_rule_never_grants() -> None:
    assert evaluate_rule(_rule([], "allow"), _context()) is False


def test_empty_deny_rule_always_denies() -> None:
    assert evaluate_rule(_rule([], "deny"), _context()) is True


def test_inactive_rule_is_false() -> None:
    rule = _rule([_cond("user.role", "exists")], is_active=False)
    assert evaluate_rule(rule, _context()) is False


def test_deny_inverts_outcome() -> None:
    rule = _rule([_cond("user.role", "equals", "COMPANY_ADMIN")], "deny")
    assert evaluate_rule(rule, _context()) is False
    assert evaluate_rule(rule, _context(role="COMPANY_USER")) is True


def test_left_fold_without_precedence() -> None:
    """(false OR true) AND false is false; AND binds no tighter than OR."""
    rule = _rule(
        [
            _cond("user.role", "equals", "nobody"),
            _cond("user.role", "equals", "COMPANY_ADMIN", "OR"),
            _cond("resource.attributes.level", "greater", 10, "AND"),
        ]
    )
    assert evaluate_rule(rule, _context(level=5)) is False
    assert evaluate_rule(rule, _context(level=50)) is True


def test_first_condition_logical_operator_ignored() -> None:
    rule = _rule([_cond("user.role", "equals", "COMPANY_ADMIN", "OR")])
    assert evaluate_rule(rule, _context()) is True


@pytest.mark.parametrize(
    ("operator", "value", "attributes", "expected"),
    [
        ("equals", "a", {"x": "a"}, True),
        ("not_equals", "a", {"x": "b"}, True),
        ("in", ["a", "b"], {"x": "b"}, True),
        ("in", "ab", {"x": "a"}, False),
        ("not_in", ["a"], {"x": "b"}, True),
        ("contains", "ell", {"x": "hello"}, True),
        ("not_contains", "zz", {"x": "hello"}, True),
        ("greater", 3, {"x": 5}, True),
        ("greater", 3, {"x": "5"}, True),
        ("greater", 3, {"x": "five"}, False),
        ("less", 3, {"x": 1.5}, True),
        ("less", 3, {}, False),
        ("regex", r"^doc-\d+$", {"x": "doc-42"}, True),
        ("regex", r"^doc-\d+$", {"x": "img-42"}, False),
        ("exists", None, {"x": 0}, True),
        ("exists", None, {}, False),
        ("not_exists", None, {}, True),
        ("not_exists", None, {"x": None}, True),
        ("equals", 1, {"x": True}, False),
        ("equals", 0, {"x": False}, False),
        ("equals", True, {"x": True}, True),
        ("equals", 1, {"x": 1.0}, True),
        ("not_equals", 1, {"x": True}, True),
        ("in", [1, 2], {"x": True}, False),
        ("not_in", [0], {"x": False}, True),
        ("regex", "^$", {}, False),
        ("regex", "^[a-z]*$", {"x": None}, False),
        ("regex", "^$", {"x": ""}, True),
        ("contains", "", {}, False),
        ("contains", "und", {}, False),
    ],
)
def test_operators(operator, value, attributes, expected) -> None:
    condition = _cond("resource.attributes.x", operator, value)
    assert evaluate_condition(condition, _context(**attributes)) is expected


def test_missing_attribute_does_not_satisfy_regex_allow_rule() -> None:
    rule = _rule([_cond("resource.attributes.tier", "regex", "^[a-z]*$")])
    assert evaluate_rule(rule, _context()) is False
    assert evaluate_rule(rule, _context(tier="gold")) is True


def test_missing_path_never_raises() -> None:
    condition = _cond("environment.location.city", "equals", "Paris")
    assert evaluate_condition(condition, _context()) is False


def test_unknown_operator_is_false() -> None:
    condition = PermissionCondition(field="user.role", operator="startswith", value="C")
    assert evaluate_condition(condition, _context()) is False


def test_invalid_regex_degrades_to_false() -> None:
    rule = _rule([_cond("user.id", "regex", "([a-z")])
    assert evaluate_rule(rule, _context()) is False


def test_regex_length_limits() -> None:
    limits = ConditionLimits(max_pattern_length=5, max_input_length=8)
    assert evaluate_condition(_cond("user.id", "regex", "user-.*"), _context(), limits) is False
    long_ctx = _context(name="x" * 20)
    assert evaluate_condition(_cond("resource.attributes.name", "regex", "x"), long_ctx, limits) is False
    assert evaluate_condition(_cond("resource.attributes.name", "regex", "x"), long_ctx) is True


def test_unhashable_value_in_set_is_false() -> None:
    condition = _cond("resource.attributes.tags", "in", {"a", "b"})
    assert evaluate_condition(condition, _context(tags=["a"])) is False


def test_applicable_rules_sorted_by_priority() -> None:
    low = _rule([], priority=1)
    high = _rule([], priority=10)
    other = _rule([], action="delete", priority=99)
    inactive = _rule([], priority=50, is_active=False)
    assert applicable_rules([low, other, high, inactive], "document", "read") == [high, low]


class TestRuleFromDict:
    def test_valid_payload(self) -> None:
        rule = PermissionRule.from_dict(
            {
                "name": "admins only",
                "resource_type": "document",
                "action": "read",
                "effect": "allow",
                "priority": "5",
                "conditions": [{"field": "user.role", "operator": "equals", "value": "COMPANY_ADMIN"}],
            }
        )
        assert rule.priority == 5
        assert rule.conditions[0].operator == ConditionOperator.EQUALS
        assert rule.conditions[0].logical_operator == LogicalOperator.AND

    def test_unknown_operator_rejected(self) -> None:
        with pytest.raises(ValidationError, match="operator"):
            PermissionRule.from_dict(
                {
                    "name": "r",
                    "resource_type": "document",
                    "action": "read",
                    "effect": "allow",
                    "conditions": [{"field": "user.role", "operator": "like"}],
                }
            )

    def test_missing_keys_rejected(self) -> None:
        with pytest.raises(ValidationError, match="effect"):
            PermissionRule.from_dict({"name": "r", "resource_type": "d", "action": "read"})

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({"conditions": ["oops"]}, "must be an object"),
            ({"conditions": [None]}, "must be an object"),
            ({"conditions": {"field": "user.role"}}, "must be a list"),
            ({"id": "nope"}, "Invalid rule id"),
            ({"priority": "high"}, "priority"),
        ],
    )
    def test_malformed_payload_rejected(self, payload: dict, message: str) -> None:
        base = {"name": "r", "resource_type": "document", "action": "read", "effect": "allow"}
        with pytest.raises(ValidationError, match=message):
            PermissionRule.from_dict({**base, **payload})

    def test_payload_must_be_object(self) -> None:
        with pytest.raises(ValidationError, match="must be an object"):
            PermissionRule.from_dict(["name", "effect"])

    def test_explicit_id_kept(self) -> None:
        rule_id = uuid4()
        rule = PermissionRule.from_dict(
            {"id": str(rule_id), "name": "r", "resource_type": "d", "action": "read", "effect": "deny"}
        )
        assert rule.id == rule_id
