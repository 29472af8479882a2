"""Event publisher port - hands committed domain events to other services."""

from collections.abc import Sequence
from typing import Protocol

from accesscontrol.domain.events import DomainEvent


class EventPublisher(Protocol):
    """Port for publishing domain events after their transaction commits."""

    async def publish(self, events: Sequence[DomainEvent]) -> None: ...
