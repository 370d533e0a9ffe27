"""Rule engine - ABAC condition evaluation and rule combination.

Conditions are evaluated independently and folded left to right: each
condition's logical operator says how it joins the running result of the ones
before it (AND unless it says OR). The effect then decides the outcome: allow
returns the folded result, deny returns its negation.

A rule without conditions folds to False, so an allow rule never grants and a
deny rule always returns True. That corner case is kept exactly as it is;
changing it would change authorization outcomes for stored rules.

Equality is strict: a boolean never equals a number, so `equals 1` does not
match `true`. `in` and `not_in` use the same comparison. A missing or null
field never matches `regex` or `contains`; it is not coerced to a string first.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from tenantauth.domain.entities import PermissionCondition, PermissionContext, PermissionRule
from tenantauth.domain.services.field_resolver import MISSING, is_present, resolve_field
from tenantauth.domain.value_objects import ConditionOperator, LogicalOperator, RuleEffect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConditionLimits:
    """Bounds on administrator-supplied regex conditions."""

    max_pattern_length: int = 256
    max_input_length: int = 4096


DEFAULT_LIMITS = ConditionLimits()

_COLLECTIONS = (list, tuple, set, frozenset)


def _as_text(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_number(value: Any) -> float | None:
    if value is MISSING or value is None or isinstance(value, (list, dict, set, tuple)):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _regex(actual: Any, pattern: Any, limits: ConditionLimits) -> bool:
    if not isinstance(pattern, str) or not is_present(actual):
        return False
    if len(pattern) > limits.max_pattern_length:
        logger.warning("Regex pattern rejected: %d chars exceeds limit", len(pattern))
        return False
    subject = _as_text(actual)
    if len(subject) > limits.max_input_length:
        logger.warning("Regex input rejected: %d chars exceeds limit", len(subject))
        return False
    try:
        compiled = _compile(pattern)
    except re.error as e:
        logger.warning("Invalid regex pattern %r: %s", pattern, e)
        return False
    return compiled.search(subject) is not None


def _strict_equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _member(actual: Any, expected: Any) -> bool:
    return any(_strict_equal(actual, item) for item in expected)


def _contains(actual: Any, expected: Any) -> bool:
    return is_present(actual) and _as_text(expected) in _as_text(actual)


def _greater(actual: Any, expected: Any) -> bool:
    left, right = _as_number(actual), _as_number(expected)
    return left is not None and right is not None and left > right


def _less(actual: Any, expected: Any) -> bool:
    left, right = _as_number(actual), _as_number(expected)
    return left is not None and right is not None and left < right


_OPERATORS: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _strict_equal,
    ConditionOperator.NOT_EQUALS: lambda a, e: not _strict_equal(a, e),
    ConditionOperator.IN: lambda a, e: isinstance(e, _COLLECTIONS) and _member(a, e),
    ConditionOperator.NOT_IN: lambda a, e: isinstance(e, _COLLECTIONS) and not _member(a, e),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.NOT_CONTAINS: lambda a, e: _as_text(e) not in _as_text(a),
    ConditionOperator.GREATER: _greater,
    ConditionOperator.LESS: _less,
    ConditionOperator.EXISTS: lambda a, e: is_present(a),
    ConditionOperator.NOT_EXISTS: lambda a, e: not is_present(a),
}


def evaluate_condition(
    condition: PermissionCondition,
    context: PermissionContext,
    limits: ConditionLimits = DEFAULT_LIMITS,
) -> bool:
    """Evaluate one condition. Unknown operators and malformed values yield False."""
    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.warning("Unknown condition operator %r on field %s", condition.operator, condition.field)
        return False

    actual = resolve_field(condition.field, context)
    if operator == ConditionOperator.REGEX:
        return _regex(actual, condition.value, limits)
    try:
        return bool(_OPERATORS[operator](actual, condition.value))
    except TypeError as e:
        # e.g. unhashable field value tested against a set
        logger.warning("Condition on %s could not be evaluated: %s", condition.field, e)
        return False


def evaluate_rule(
    rule: PermissionRule,
    context: PermissionContext,
    limits: ConditionLimits = DEFAULT_LIMITS,
) -> bool:
    """Evaluate a rule against context. Inactive rules return False."""
    if not rule.is_active:
        return False

    results = [evaluate_condition(c, context, limits) for c in rule.conditions]

    outcome = results[0] if results else False
    for condition, result in zip(rule.conditions[1:], results[1:]):
        if condition.logical_operator == LogicalOperator.OR:
            outcome = outcome or result
        else:
            outcome = outcome and result

    return outcome if rule.effect == RuleEffect.ALLOW else not outcome


def applicable_rules(
    rules: Iterable[PermissionRule], resource_type: str, action: str
) -> list[PermissionRule]:
    """Active rules for resource_type/action, highest priority first."""
    matching = [
        r
        for r in rules
        if r.is_active and r.resource_type == resource_type and r.action == action
    ]
    return sorted(matching, key=lambda r: r.priority, reverse=True)
