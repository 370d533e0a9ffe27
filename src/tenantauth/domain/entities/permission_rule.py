"""Permission rule entity - ABAC policy for a resource type and action."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from tenantauth.domain.exceptions import ValidationError
from tenantauth.domain.value_objects import ConditionOperator, LogicalOperator, RuleEffect


@dataclass(frozen=True)
class PermissionCondition:
    """One atomic test of a context field.

    operator is normally a ConditionOperator; a raw string survives only when a
    rule was loaded without validation, and evaluates to False.
    """

    field: str
    operator: ConditionOperator | str
    value: Any = None
    logical_operator: LogicalOperator = LogicalOperator.AND

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PermissionCondition":
        if not isinstance(data, Mapping):
            raise ValidationError("Each condition must be an object")
        try:
            path = data["field"]
            operator = data["operator"]
        except KeyError as e:
            raise ValidationError(f"Condition is missing required key: {e}") from None
        if not isinstance(path, str) or not path:
            raise ValidationError("Condition field must be a non-empty dot path")
        return cls(
            field=path,
            operator=ConditionOperator.parse(operator),
            value=data.get("value"),
            logical_operator=LogicalOperator.parse(data.get("logical_operator") or "AND"),
        )

    def to_dict(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, (set, frozenset, tuple)):
            value = list(value)
        return {
            "field": self.field,
            "operator": str(self.operator),
            "value": value,
            "logical_operator": self.logical_operator.value,
        }


def _rule_id(value: Any) -> UUID:
    if not value:
        return uuid4()
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid rule id {value!r}") from None


@dataclass
class PermissionRule:
    """Rule combining conditions into an allow/deny effect."""

    id: UUID
    name: str
    resource_type: str
    action: str
    effect: RuleEffect
    conditions: list[PermissionCondition] = field(default_factory=list)
    priority: int = 0
    is_active: bool = True
    description: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], rule_id: UUID | None = None) -> "PermissionRule":
        """Validate a rule payload. Unknown operators/effects raise ValidationError."""
        if not isinstance(data, Mapping):
            raise ValidationError("Rule must be an object")
        missing = [k for k in ("name", "resource_type", "action", "effect") if k not in data]
        if missing:
            raise ValidationError(f"Rule is missing required keys: {', '.join(missing)}")
        conditions = data.get("conditions") or []
        if not isinstance(conditions, list):
            raise ValidationError("Rule conditions must be a list")
        try:
            priority = int(data.get("priority", 0))
        except (TypeError, ValueError):
            raise ValidationError("Rule priority must be an integer") from None
        if rule_id is None:
            rule_id = _rule_id(data.get("id"))
        return cls(
            id=rule_id,
            name=str(data["name"]),
            description=data.get("description"),
            resource_type=str(data["resource_type"]),
            action=str(data["action"]),
            effect=RuleEffect.parse(data["effect"]),
            conditions=[PermissionCondition.from_dict(c) for c in conditions],
            priority=priority,
            is_active=bool(data.get("is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "resource_type": self.resource_type,
            "action": self.action,
            "effect": self.effect.value,
            "conditions": [c.to_dict() for c in self.conditions],
            "priority": self.priority,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
