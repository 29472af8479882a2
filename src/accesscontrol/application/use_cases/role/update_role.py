"""Update role use case."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from accesscontrol.application.dto import CommandResult, RoleResponse
from accesscontrol.domain.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)


@dataclass
class UpdateRoleCommand:
    """Input for updating a role. ``permissions`` is the full target set."""

    id: UUID
    name: str
    description: str | None = None
    permissions: list[str] = field(default_factory=list)


class UpdateRoleUseCase:
    """Rename a role and sync its permission set."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: UpdateRoleCommand) -> CommandResult[RoleResponse]:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(command.id)
            if not role:
                raise NotFound("Role", command.id)

            if await uow.roles.name_exists_in_scope(
                command.name, role.scope, exclude_role_id=role.id
            ):
                raise Conflict(
                    f"Role with name '{command.name}' already exists in this scope."
                )

            updated = role.update(command.name, command.description)
            added, removed = role.sync_permissions(command.permissions)
            logger.debug(
                "Role %s permissions synced: +%s -%s", role.id, added, removed
            )
            await uow.roles.update(role)

        return CommandResult(RoleResponse.from_entity(role), [updated])
