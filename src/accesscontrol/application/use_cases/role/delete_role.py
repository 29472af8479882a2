"""Delete role use case."""

from dataclasses import dataclass
from uuid import UUID

from accesscontrol.application.dto import CommandResult
from accesscontrol.domain.exceptions import DomainError, NotFound


@dataclass
class DeleteRoleCommand:
    """Input for deleting a role."""

    id: UUID


class DeleteRoleUseCase:
    """Delete a role that no user holds any more."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: DeleteRoleCommand) -> CommandResult[None]:
        """Delete role. Refused while any assignment references it."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(command.id)
            if not role:
                raise NotFound("Role", command.id)

            if await uow.assignments.count_by_role(role.id) > 0:
                raise DomainError("Cannot delete role with active assignments.")

            deleted = role.delete()
            await uow.roles.delete(role.id)

        return CommandResult(None, [deleted])
