"""Event publishers that log, and that fan out to several publishers."""

import logging
from collections.abc import Sequence

from accesscontrol.application.ports import EventPublisher
from accesscontrol.domain.events import DomainEvent

logger = logging.getLogger(__name__)


class LoggingEventPublisher:
    """Writes one INFO line per domain event."""

    async def publish(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            logger.info("Domain event %s: %s", event.name, event)


class CompositeEventPublisher:
    """Publishes to each publisher in order."""

    def __init__(self, publishers: Sequence[EventPublisher]) -> None:
        self._publishers = list(publishers)

    async def publish(self, events: Sequence[DomainEvent]) -> None:
        if not events:
            return
        for publisher in self._publishers:
            await publisher.publish(events)
