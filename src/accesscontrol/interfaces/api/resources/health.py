"""Health check endpoints."""

import logging
from collections.abc import Awaitable, Callable

import falcon
import falcon.asgi

logger = logging.getLogger(__name__)

ReadinessCheck = Callable[[], Awaitable[bool]]


class HealthResource:
    """Liveness and readiness endpoints."""

    def __init__(self, readiness_check: ReadinessCheck | None = None) -> None:
        self._readiness_check = readiness_check

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /health/ready - readiness (database reachable)."""
        ready = True
        if self._readiness_check is not None:
            ready = await self._readiness_check()
        if ready:
            resp.media = {"status": "ready", "checks": {"database": "ok"}}
            resp.status = falcon.HTTP_200
        else:
            logger.warning("Readiness check failed: database unreachable")
            resp.media = {"status": "unavailable", "checks": {"database": "failed"}}
            resp.status = falcon.HTTP_503
