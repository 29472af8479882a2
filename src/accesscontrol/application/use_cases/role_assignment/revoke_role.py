"""Revoke role use case."""

from dataclasses import dataclass
from uuid import UUID

from accesscontrol.application.dto import CommandResult
from accesscontrol.domain.exceptions import NotFound


@dataclass
class RevokeRoleCommand:
    """Input for removing a role from a user."""

    role_id: UUID
    user_id: UUID
    scope_id: UUID


class RevokeRoleUseCase:
    """Revoke role from user in scope. The assignment row is deleted."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: RevokeRoleCommand) -> CommandResult[None]:
        async with self._uow_factory() as uow:
            assignment = await uow.assignments.find(
                command.role_id, command.user_id, command.scope_id
            )
            if not assignment:
                raise NotFound(
                    "RoleAssignment",
                    f"RoleId={command.role_id}, UserId={command.user_id}, "
                    f"ScopeId={command.scope_id}",
                )
            revoked = assignment.revoke()
            await uow.assignments.delete(assignment.id)

        return CommandResult(None, [revoked])
