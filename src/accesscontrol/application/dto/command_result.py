"""Result of a write use case: the value plus the events it produced."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from accesscontrol.domain.events import DomainEvent

T = TypeVar("T")


@dataclass
class CommandResult(Generic[T]):
    """Write outcome. ``events`` are committed; the dispatcher publishes them."""

    value: T
    events: list[DomainEvent] = field(default_factory=list)
