"""Domain event publishers."""

from accesscontrol.infrastructure.events.audit_publisher import AuditServiceEventPublisher
from accesscontrol.infrastructure.events.logging_publisher import (
    CompositeEventPublisher,
    LoggingEventPublisher,
)

__all__ = [
    "AuditServiceEventPublisher",
    "CompositeEventPublisher",
    "LoggingEventPublisher",
]
