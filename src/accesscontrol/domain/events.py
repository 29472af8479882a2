"""Domain events - returned by entity mutations, published after commit."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from accesscontrol.domain.value_objects import Scope


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base for all domain events."""

    occurred_at: datetime = field(default_factory=_now)

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, kw_only=True)
class RoleCreated(DomainEvent):
    role_id: UUID
    role_name: str
    scope: Scope


@dataclass(frozen=True, kw_only=True)
class RoleUpdated(DomainEvent):
    role_id: UUID
    role_name: str


@dataclass(frozen=True, kw_only=True)
class RoleDeleted(DomainEvent):
    role_id: UUID


@dataclass(frozen=True, kw_only=True)
class RoleAssignmentCreated(DomainEvent):
    assignment_id: UUID
    role_id: UUID
    user_id: UUID
    scope: Scope
    assigned_by: UUID


@dataclass(frozen=True, kw_only=True)
class RoleAssignmentRevoked(DomainEvent):
    assignment_id: UUID
    role_id: UUID
    user_id: UUID
    scope: Scope
