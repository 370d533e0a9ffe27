"""PostgreSQL permission rule repository implementation."""

from typing import Any
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from tenantauth.domain.entities import PermissionCondition, PermissionRule
from tenantauth.domain.value_objects import ConditionOperator, LogicalOperator, RuleEffect

_COLUMNS = (
    "id, name, description, resource_type, action, effect, conditions, priority, "
    "is_active, created_by, updated_by, created_at, updated_at"
)
_OPERATORS = {o.value: o for o in ConditionOperator}


def _condition(data: dict[str, Any]) -> PermissionCondition:
    # Unknown operators are kept as raw strings; they evaluate to False.
    operator = data.get("operator", "")
    return PermissionCondition(
        field=data.get("field", ""),
        operator=_OPERATORS.get(operator, operator),
        value=data.get("value"),
        logical_operator=LogicalOperator.OR
        if data.get("logical_operator") == "OR"
        else LogicalOperator.AND,
    )


def _row_to_rule(r: tuple) -> PermissionRule:
    return PermissionRule(
        id=r[0],
        name=r[1],
        description=r[2],
        resource_type=r[3],
        action=r[4],
        effect=RuleEffect(r[5]),
        conditions=[_condition(c) for c in (r[6] or [])],
        priority=r[7],
        is_active=r[8],
        created_by=r[9],
        updated_by=r[10],
        created_at=r[11],
        updated_at=r[12],
    )


class PostgresRuleRepository:
    """Permission rule repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, rule_id: UUID) -> PermissionRule | None:
        """Get rule by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_rule WHERE id = %s",
            (rule_id,),
        )
        r = await cur.fetchone()
        return _row_to_rule(r) if r else None

    async def list(
        self,
        *,
        resource_type: str | None = None,
        action: str | None = None,
    ) -> list[PermissionRule]:
        """List rules, highest priority first."""
        conditions = []
        params: list[object] = []
        if resource_type:
            conditions.append("resource_type = %s")
            params.append(resource_type)
        if action:
            conditions.append("action = %s")
            params.append(action)
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_rule{where} ORDER BY priority DESC, created_at",
            tuple(params),
        )
        rows = await cur.fetchall()
        return [_row_to_rule(r) for r in rows]

    async def create(self, rule: PermissionRule) -> PermissionRule:
        """Create rule."""
        await self._conn.execute(
            f"INSERT INTO permission_rule ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                rule.id,
                rule.name,
                rule.description,
                rule.resource_type,
                rule.action,
                rule.effect.value,
                Jsonb([c.to_dict() for c in rule.conditions]),
                rule.priority,
                rule.is_active,
                rule.created_by,
                rule.updated_by,
                rule.created_at,
                rule.updated_at,
            ),
        )
        return rule

    async def update(self, rule: PermissionRule) -> None:
        """Update rule definition."""
        await self._conn.execute(
            "UPDATE permission_rule SET name=%s, description=%s, resource_type=%s, action=%s, "
            "effect=%s, conditions=%s, priority=%s, is_active=%s, updated_by=%s, updated_at=%s "
            "WHERE id=%s",
            (
                rule.name,
                rule.description,
                rule.resource_type,
                rule.action,
                rule.effect.value,
                Jsonb([c.to_dict() for c in rule.conditions]),
                rule.priority,
                rule.is_active,
                rule.updated_by,
                rule.updated_at,
                rule.id,
            ),
        )

    async def delete(self, rule_id: UUID) -> None:
        """Delete rule."""
        await self._conn.execute(
            "DELETE FROM permission_rule WHERE id = %s",
            (rule_id,),
        )
