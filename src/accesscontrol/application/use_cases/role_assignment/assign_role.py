"""Assign role use case."""

from dataclasses import dataclass
from uuid import UUID

from accesscontrol.application.dto import CommandResult, RoleAssignmentResponse
from accesscontrol.domain.entities import RoleAssignment
from accesscontrol.domain.exceptions import Conflict, DomainError, NotFound
from accesscontrol.domain.value_objects import Scope


@dataclass
class AssignRoleCommand:
    """Input for granting a role to a user."""

    role_id: UUID
    user_id: UUID
    scope: Scope
    assigned_by: UUID


class AssignRoleUseCase:
    """Grant role to user within the scope the role is defined in."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, command: AssignRoleCommand
    ) -> CommandResult[RoleAssignmentResponse]:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(command.role_id)
            if not role:
                raise NotFound("Role", command.role_id)

            if role.scope != command.scope:
                raise DomainError("Role scope does not match the assignment scope.")

            if await uow.assignments.exists(
                command.role_id, command.user_id, command.scope.id
            ):
                raise Conflict("Role assignment already exists.")

            assignment, created = RoleAssignment.create(
                command.role_id, command.user_id, command.scope, command.assigned_by
            )
            await uow.assignments.create(assignment)

            saved = await uow.assignments.get_by_id(assignment.id)
            if not saved:
                raise NotFound("RoleAssignment", assignment.id)

        return CommandResult(RoleAssignmentResponse.from_entity(saved), [created])
