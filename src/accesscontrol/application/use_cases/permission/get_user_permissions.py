"""Get user permissions use case."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class GetUserPermissionsQuery:
    user_id: UUID
    scope_id: UUID


class GetUserPermissionsUseCase:
    """Distinct union of actions across all roles a user holds in a scope."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, query: GetUserPermissionsQuery) -> list[str]:
        async with self._uow_factory() as uow:
            assignments = await uow.assignments.list_by_user_and_scope(
                query.user_id, query.scope_id
            )

        actions: dict[str, None] = {}
        for a in assignments:
            if a.role is not None:
                actions.update(dict.fromkeys(a.role.actions))
        return list(actions)
