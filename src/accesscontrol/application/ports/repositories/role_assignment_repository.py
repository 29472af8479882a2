"""Role assignment repository port."""

from typing import Protocol
from uuid import UUID

from accesscontrol.domain.entities import RoleAssignment


class RoleAssignmentRepository(Protocol):
    """Port for role assignment persistence.

    Lookups by user and scope return assignments with ``role`` loaded,
    including its permissions.
    """

    async def get_by_id(self, assignment_id: UUID) -> RoleAssignment | None: ...

    async def find(
        self, role_id: UUID, user_id: UUID, scope_id: UUID
    ) -> RoleAssignment | None: ...

    async def exists(self, role_id: UUID, user_id: UUID, scope_id: UUID) -> bool: ...

    async def list_by_user_and_scope(
        self, user_id: UUID, scope_id: UUID
    ) -> list[RoleAssignment]: ...

    async def count_by_role(self, role_id: UUID) -> int: ...

    async def create(self, assignment: RoleAssignment) -> RoleAssignment: ...

    async def delete(self, assignment_id: UUID) -> None: ...
