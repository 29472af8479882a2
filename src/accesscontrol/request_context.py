"""Request-scoped context using contextvars.

Holds the correlation id and the authenticated actor for the request being
served, so that logging and event publishing can read them without having
the request object passed around.
"""

from contextvars import ContextVar
from uuid import UUID

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_actor_id: ContextVar[str | None] = ContextVar("actor_id", default=None)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_actor_id(value: str | None) -> None:
    _actor_id.set(value)


def get_actor_uuid() -> UUID | None:
    """Actor id as a UUID, or None when absent or not a UUID (e.g. anonymous)."""
    value = _actor_id.get()
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None
