"""PostgreSQL async connection pool."""

import logging

import psycopg
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via PoolLifespanMiddleware in ASGI lifespan).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


async def ping(pool: AsyncConnectionPool, timeout: float = 2.0) -> bool:
    """True if a pooled connection can run ``SELECT 1`` within ``timeout``."""
    try:
        async with pool.connection(timeout=timeout) as conn:
            cur = await conn.execute("SELECT 1")
            row = await cur.fetchone()
    except psycopg.Error as e:
        logger.warning("Database ping failed: %s", e)
        return False
    return bool(row and row[0] == 1)
