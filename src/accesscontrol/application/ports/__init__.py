"""Application ports - interfaces for external adapters."""

from accesscontrol.application.ports.event_publisher import EventPublisher
from accesscontrol.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "EventPublisher",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
