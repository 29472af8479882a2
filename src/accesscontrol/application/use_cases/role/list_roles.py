"""List roles by scope use case."""

from dataclasses import dataclass

from accesscontrol.application.dto import RoleResponse
from accesscontrol.domain.value_objects import Scope


@dataclass
class ListRolesByScopeQuery:
    scope: Scope


class ListRolesByScopeUseCase:
    """List every role defined in a scope, ordered by name."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, query: ListRolesByScopeQuery) -> list[RoleResponse]:
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_by_scope(query.scope)
        return [RoleResponse.from_entity(r) for r in sorted(roles, key=lambda r: r.name)]
