"""Correlation id propagation and per-request access logging."""

import logging
import time
import uuid

import falcon.asgi

from accesscontrol.request_context import set_correlation_id

logger = logging.getLogger("accesscontrol.access")

CORRELATION_HEADER = "X-Correlation-Id"
_MAX_LENGTH = 100


class CorrelationIdMiddleware:
    """Reads or generates X-Correlation-Id and logs one line per request."""

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        incoming = (req.get_header(CORRELATION_HEADER) or "").strip()
        correlation_id = incoming[:_MAX_LENGTH] if incoming else str(uuid.uuid4())
        req.context.correlation_id = correlation_id
        req.context.started_at = time.perf_counter()
        set_correlation_id(correlation_id)

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        correlation_id = getattr(req.context, "correlation_id", None)
        if correlation_id:
            resp.set_header(CORRELATION_HEADER, correlation_id)
        started = getattr(req.context, "started_at", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        user = getattr(req.context, "user", None)
        logger.info(
            "%s %s -> %s (%.1f ms) user=%s",
            req.method,
            req.path,
            resp.status,
            elapsed_ms,
            user.user_id if user else "-",
        )
