"""Role repository port."""

from typing import Protocol
from uuid import UUID

from accesscontrol.domain.entities import Role
from accesscontrol.domain.value_objects import Scope


class RoleRepository(Protocol):
    """Port for role persistence. Roles are always loaded with permissions."""

    async def get_by_id(self, role_id: UUID) -> Role | None: ...

    async def list_by_scope(self, scope: Scope) -> list[Role]: ...

    async def name_exists_in_scope(
        self, name: str, scope: Scope, exclude_role_id: UUID | None = None
    ) -> bool: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def delete(self, role_id: UUID) -> None: ...
