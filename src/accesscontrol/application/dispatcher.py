"""Explicit command/query dispatch with a validation step."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from accesscontrol.application.dto import CommandResult
from accesscontrol.application.ports import EventPublisher
from accesscontrol.application.validation import Validator, run_validators

logger = logging.getLogger(__name__)


class Handler(Protocol):
    async def execute(self, request: Any) -> Any: ...


class Dispatcher:
    """Routes each request to its use case after running its validators.

    Both tables are built by the composition root; there is no discovery.
    Write use cases return a CommandResult whose events were committed with
    the change; the dispatcher hands them to the event publisher.
    """

    def __init__(
        self,
        handlers: Mapping[type, Handler],
        validators: Mapping[type, Sequence[Validator]] | None = None,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._handlers = dict(handlers)
        self._validators = dict(validators or {})
        self._events = event_publisher

    async def dispatch(self, request: object) -> Any:
        request_type = type(request)
        handler = self._handlers.get(request_type)
        if handler is None:
            raise LookupError(f"No handler registered for {request_type.__name__}")

        run_validators(request, self._validators.get(request_type, ()))
        logger.debug("Dispatching %s", request_type.__name__)
        result = await handler.execute(request)

        if isinstance(result, CommandResult) and result.events and self._events:
            await self._events.publish(result.events)
        return result
