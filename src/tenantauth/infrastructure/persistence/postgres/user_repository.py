"""PostgreSQL user repository implementation."""

import logging

from psycopg import AsyncConnection

from tenantauth.domain.entities import Actor
from tenantauth.domain.value_objects import SubscriptionTier, UserRole
from tenantauth.domain.value_objects.permission_name import split_valid

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, role, is_active, company_id, permissions, subscription_tier, "
    "email_verified, email, name"
)


class PostgresUserRepository:
    """Reads user snapshots from app_user and writes role/permission changes back."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> Actor | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        permissions, unknown = split_valid(r[4] or [])
        if unknown:
            # Stored grants outside the vocabulary confer nothing.
            logger.warning("User %s has unknown stored permissions: %s", r[0], unknown)
        return Actor(
            id=r[0],
            role=UserRole(r[1]),
            is_active=r[2],
            company_id=r[3],
            permissions=frozenset(permissions),
            subscription_tier=SubscriptionTier(r[5]),
            email_verified=r[6],
            email=r[7],
            name=r[8],
        )

    async def update_access(self, actor: Actor) -> None:
        """Persist role, company and explicit permissions."""
        await self._conn.execute(
            "UPDATE app_user SET role=%s, company_id=%s, permissions=%s, updated_at=now() "
            "WHERE id=%s",
            (
                actor.role.value,
                actor.company_id,
                sorted(p.value for p in actor.permissions),
                actor.id,
            ),
        )
