"""PostgreSQL async connection pool and readiness probe."""

import logging

import psycopg
from psycopg_pool import AsyncConnectionPool, PoolTimeout

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. PoolLifespanMiddleware opens it on ASGI
    startup and closes it on shutdown.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


def pool_readiness(pool: AsyncConnectionPool, timeout: float = 2.0):
    """Return an async probe that is True when the pool can run a query."""

    async def probe() -> bool:
        try:
            async with pool.connection(timeout=timeout) as conn:
                await conn.execute("SELECT 1")
        except (psycopg.Error, PoolTimeout) as e:
            logger.warning("Database readiness check failed: %s", e)
            return False
        return True

    return probe
