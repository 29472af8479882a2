"""RoleAssignment entity - grant of one role to one user within one scope."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from accesscontrol.domain.entities.role import Role
from accesscontrol.domain.events import RoleAssignmentCreated, RoleAssignmentRevoked
from accesscontrol.domain.value_objects import Scope


@dataclass
class RoleAssignment:
    """RoleAssignment - user holds role within scope.

    ``role`` is navigation data filled in by repositories that load it.
    Revocation is destructive: the row is deleted right after ``revoke()``.
    """

    id: UUID
    role_id: UUID
    user_id: UUID
    scope: Scope
    assigned_at: datetime
    assigned_by: UUID
    role: Role | None = None

    @classmethod
    def create(
        cls, role_id: UUID, user_id: UUID, scope: Scope, assigned_by: UUID
    ) -> tuple["RoleAssignment", RoleAssignmentCreated]:
        assignment = cls(
            id=uuid4(),
            role_id=role_id,
            user_id=user_id,
            scope=scope,
            assigned_at=datetime.now(UTC),
            assigned_by=assigned_by,
        )
        event = RoleAssignmentCreated(
            assignment_id=assignment.id,
            role_id=role_id,
            user_id=user_id,
            scope=scope,
            assigned_by=assigned_by,
        )
        return assignment, event

    def revoke(self) -> RoleAssignmentRevoked:
        return RoleAssignmentRevoked(
            assignment_id=self.id,
            role_id=self.role_id,
            user_id=self.user_id,
            scope=self.scope,
        )
