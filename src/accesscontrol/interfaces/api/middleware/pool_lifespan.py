"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from accesscontrol.infrastructure.persistence.migrations import upgrade_head_async

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on startup and closes it on shutdown.

    When ``database_url`` is given, pending migrations are applied before the
    pool opens.
    """

    def __init__(self, pool: AsyncConnectionPool, database_url: str | None = None) -> None:
        self._pool = pool
        self._database_url = database_url

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        if self._database_url:
            await upgrade_head_async(self._database_url)
        await self._pool.open()
        logger.info("Connection pool opened")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.close()
        logger.info("Connection pool closed")
