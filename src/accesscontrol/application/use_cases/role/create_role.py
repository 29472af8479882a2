"""Create role use case."""

from dataclasses import dataclass, field

from accesscontrol.application.dto import CommandResult, RoleResponse
from accesscontrol.domain.entities import Role
from accesscontrol.domain.exceptions import Conflict
from accesscontrol.domain.value_objects import Scope


@dataclass
class CreateRoleCommand:
    """Input for creating a role."""

    name: str
    scope: Scope
    description: str | None = None
    permissions: list[str] = field(default_factory=list)


class CreateRoleUseCase:
    """Create a role in a scope with an initial permission set."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: CreateRoleCommand) -> CommandResult[RoleResponse]:
        """Create role. Name must be unused within the scope."""
        async with self._uow_factory() as uow:
            if await uow.roles.name_exists_in_scope(command.name, command.scope):
                raise Conflict(
                    f"Role with name '{command.name}' already exists in this scope."
                )

            role, created = Role.create(command.name, command.description, command.scope)
            for action in command.permissions:
                role.add_permission(action)
            await uow.roles.create(role)

        return CommandResult(RoleResponse.from_entity(role), [created])
