"""Operators and effects used by ABAC rules."""

from enum import StrEnum

from tenantauth.domain.value_objects.vocabulary import parse_member


class ConditionOperator(StrEnum):
    """Comparison applied between a resolved field and a condition value."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER = "greater"
    LESS = "less"
    REGEX = "regex"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"

    @classmethod
    def parse(cls, value: object) -> "ConditionOperator":
        return parse_member(cls, value, "operator")


class LogicalOperator(StrEnum):
    """How a condition combines with the running result of the previous ones."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, value: object) -> "LogicalOperator":
        return parse_member(cls, value, "logical operator")


class RuleEffect(StrEnum):
    """Effect of a rule."""

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def parse(cls, value: object) -> "RuleEffect":
        return parse_member(cls, value, "rule effect")
