"""Get role use case."""

from dataclasses import dataclass
from uuid import UUID

from accesscontrol.application.dto import RoleResponse
from accesscontrol.domain.exceptions import NotFound


@dataclass
class GetRoleQuery:
    id: UUID


class GetRoleUseCase:
    """Get role by id, with permissions."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, query: GetRoleQuery) -> RoleResponse:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(query.id)
            if not role:
                raise NotFound("Role", query.id)
            return RoleResponse.from_entity(role)
