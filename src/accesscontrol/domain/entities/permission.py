"""Permission entity - one action string owned by one role."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from accesscontrol.domain.exceptions import DomainError


@dataclass
class Permission:
    """Permission - an allowed action attached to exactly one role."""

    id: UUID
    role_id: UUID
    action: str
    created_at: datetime

    @classmethod
    def create(cls, role_id: UUID, action: str) -> "Permission":
        if not action or not action.strip():
            raise DomainError("Permission action cannot be empty.")
        return cls(
            id=uuid4(),
            role_id=role_id,
            action=action,
            created_at=datetime.now(UTC),
        )
