"""PostgreSQL permission template repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from tenantauth.domain.entities import PermissionTemplate
from tenantauth.domain.value_objects.permission_name import split_valid

_COLUMNS = "id, name, description, permissions, created_by, created_at, updated_at"


def _row_to_template(r: tuple) -> PermissionTemplate:
    permissions, _unknown = split_valid(r[3] or [])
    return PermissionTemplate(
        id=r[0],
        name=r[1],
        description=r[2],
        permissions=frozenset(permissions),
        created_by=r[4],
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresTemplateRepository:
    """Template repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, template_id: UUID) -> PermissionTemplate | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_template WHERE id = %s",
            (template_id,),
        )
        r = await cur.fetchone()
        return _row_to_template(r) if r else None

    async def list_all(self) -> list[PermissionTemplate]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_template ORDER BY name"
        )
        rows = await cur.fetchall()
        return [_row_to_template(r) for r in rows]

    async def create(self, template: PermissionTemplate) -> PermissionTemplate:
        await self._conn.execute(
            f"INSERT INTO permission_template ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                template.id,
                template.name,
                template.description,
                sorted(p.value for p in template.permissions),
                template.created_by,
                template.created_at,
                template.updated_at,
            ),
        )
        return template
