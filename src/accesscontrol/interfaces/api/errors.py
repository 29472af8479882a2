"""Maps exceptions to RFC 7807 problem responses."""

import logging

import falcon
import falcon.asgi
import falcon.media
import pydantic

from accesscontrol.domain.exceptions import (
    Conflict,
    DomainError,
    NotFound,
    ValidationError,
)
from accesscontrol.request_context import get_correlation_id

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"

_TYPES = {
    400: "https://tools.ietf.org/html/rfc9110#section-15.5.1",
    401: "https://tools.ietf.org/html/rfc9110#section-15.5.2",
    403: "https://tools.ietf.org/html/rfc9110#section-15.5.4",
    404: "https://tools.ietf.org/html/rfc9110#section-15.5.5",
    405: "https://tools.ietf.org/html/rfc9110#section-15.5.6",
    409: "https://tools.ietf.org/html/rfc9110#section-15.5.10",
    415: "https://tools.ietf.org/html/rfc9110#section-15.5.16",
    422: "https://tools.ietf.org/html/rfc9110#section-15.5.21",
    500: "https://tools.ietf.org/html/rfc9110#section-15.6.1",
    503: "https://tools.ietf.org/html/rfc9110#section-15.6.4",
}


class Unauthorized(Exception):
    """Bearer token missing, malformed or rejected by the identity provider."""


def problem(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    status: int,
    title: str,
    detail: str | None,
    **extensions,
) -> None:
    """Write a problem+json body onto the response."""
    body = {
        "type": _TYPES.get(status, "about:blank"),
        "title": title,
        "status": status,
        "detail": detail,
        "instance": req.path,
        "correlationId": get_correlation_id(),
        **extensions,
    }
    resp.status = falcon.code_to_http_status(status)
    resp.content_type = PROBLEM_JSON
    resp.media = body


def _pydantic_errors(ex: pydantic.ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in ex.errors():
        field = ".".join(str(p) for p in err["loc"]) or "body"
        errors.setdefault(field, []).append(err["msg"])
    return errors


async def _handle_validation(req, resp, ex: ValidationError, params) -> None:
    logger.warning("Validation failed: %s", ex.errors)
    problem(req, resp, 400, "Validation Error", str(ex), errors=ex.errors)


async def _handle_request_model(req, resp, ex: pydantic.ValidationError, params) -> None:
    errors = _pydantic_errors(ex)
    logger.warning("Malformed request: %s", errors)
    problem(
        req,
        resp,
        400,
        "Validation Error",
        "One or more validation errors occurred.",
        errors=errors,
    )


async def _handle_not_found(req, resp, ex: NotFound, params) -> None:
    logger.warning("Not found: %s", ex)
    problem(req, resp, 404, "Not Found", str(ex))


async def _handle_conflict(req, resp, ex: Conflict, params) -> None:
    logger.warning("Conflict: %s", ex)
    problem(req, resp, 409, "Conflict", str(ex))


async def _handle_domain(req, resp, ex: DomainError, params) -> None:
    logger.warning("Domain rule violated: %s", ex)
    problem(req, resp, 422, "Domain Error", str(ex))


async def _handle_unauthorized(req, resp, ex: Unauthorized, params) -> None:
    logger.warning("Unauthorized: %s", ex)
    problem(req, resp, 401, "Unauthorized", str(ex))
    resp.set_header("WWW-Authenticate", "Bearer")


async def _handle_http_error(req, resp, ex: falcon.HTTPError, params) -> None:
    status = falcon.http_status_to_code(ex.status)
    problem(req, resp, status, ex.title, ex.description)
    for name, value in (ex.headers or {}).items():
        resp.set_header(name, value)


async def _handle_unexpected(req, resp, ex: Exception, params) -> None:
    logger.error("Unhandled exception on %s %s", req.method, req.path, exc_info=ex)
    problem(req, resp, 500, "Internal Server Error", "An unexpected error occurred.")


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install problem+json rendering and the exception → status mapping."""
    app.resp_options.media_handlers[PROBLEM_JSON] = falcon.media.JSONHandler()
    app.add_error_handler(Exception, _handle_unexpected)
    app.add_error_handler(falcon.HTTPError, _handle_http_error)
    app.add_error_handler(pydantic.ValidationError, _handle_request_model)
    app.add_error_handler(ValidationError, _handle_validation)
    app.add_error_handler(NotFound, _handle_not_found)
    app.add_error_handler(Conflict, _handle_conflict)
    app.add_error_handler(DomainError, _handle_domain)
    app.add_error_handler(Unauthorized, _handle_unauthorized)
