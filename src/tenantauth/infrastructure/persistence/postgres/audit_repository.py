"""PostgreSQL audit repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.domain.entities import AuditEntry

_COLUMNS = (
    "id, user_id, permission, action, resource_type, resource_id, result, reason, "
    "context, timestamp"
)


def _build_audit_filter(query: AuditQuery) -> tuple[list[str], list[object]]:
    """SQL conditions and params for the filters set on query."""
    conditions: list[str] = []
    params: list[object] = []
    if query.user_id:
        conditions.append("user_id = %s")
        params.append(query.user_id)
    if query.start:
        conditions.append("timestamp >= %s")
        params.append(query.start)
    if query.end:
        conditions.append("timestamp <= %s")
        params.append(query.end)
    if query.result is not None:
        conditions.append("result = %s")
        params.append(query.result)
    if query.permission:
        conditions.append("permission = %s")
        params.append(query.permission)
    return conditions, params


class PostgresAuditRepository:
    """Append-only writes and filtered reads on permission_audit."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: AuditEntry) -> None:
        """Insert one entry. A single INSERT, so partial entries are never stored."""
        await self._conn.execute(
            f"INSERT INTO permission_audit ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.user_id,
                entry.permission,
                entry.action,
                entry.resource_type,
                entry.resource_id,
                entry.result,
                entry.reason,
                Jsonb(entry.context),
                entry.timestamp,
            ),
        )

    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        """Entries matching query, newest first."""
        conditions, params = _build_audit_filter(query)
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_audit{where} ORDER BY timestamp DESC LIMIT %s",
            (*params, query.limit),
        )
        rows = await cur.fetchall()
        return [
            AuditEntry(
                id=r[0],
                user_id=r[1],
                permission=r[2],
                action=r[3],
                resource_type=r[4],
                resource_id=r[5],
                result=r[6],
                reason=r[7],
                context=r[8] or {},
                timestamp=r[9],
            )
            for r in rows
        ]
