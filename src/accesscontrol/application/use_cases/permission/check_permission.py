"""Check permission use case."""

from dataclasses import dataclass
from uuid import UUID

from accesscontrol.application.dto import PermissionCheckResponse


@dataclass
class CheckPermissionQuery:
    user_id: UUID
    scope_id: UUID
    permission: str


class CheckPermissionUseCase:
    """Does any role assigned to the user in this exact scope grant the action?

    Only assignments made in ``scope_id`` are consulted. A workspace check
    does not fall back to organization-level assignments.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, query: CheckPermissionQuery) -> PermissionCheckResponse:
        async with self._uow_factory() as uow:
            assignments = await uow.assignments.list_by_user_and_scope(
                query.user_id, query.scope_id
            )

        has_permission = any(
            a.role is not None and a.role.has_permission(query.permission)
            for a in assignments
        )
        return PermissionCheckResponse(
            has_permission=has_permission,
            user_id=query.user_id,
            scope_id=query.scope_id,
            permission=query.permission,
        )
