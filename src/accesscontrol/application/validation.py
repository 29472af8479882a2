"""Request validators run by the dispatcher before a use case executes.

Each validator takes the request and returns ``(field, message)`` pairs for
every rule it breaks. An empty result means the request is valid.
"""

import re
from collections.abc import Callable, Iterable, Iterator
from uuid import UUID

from accesscontrol.application.use_cases.permission.check_permission import (
    CheckPermissionQuery,
)
from accesscontrol.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsQuery,
)
from accesscontrol.application.use_cases.role.create_role import CreateRoleCommand
from accesscontrol.application.use_cases.role.update_role import UpdateRoleCommand
from accesscontrol.application.use_cases.role_assignment.assign_role import (
    AssignRoleCommand,
)
from accesscontrol.application.use_cases.role_assignment.revoke_role import (
    RevokeRoleCommand,
)
from accesscontrol.domain.exceptions import ValidationError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PERMISSION_MAX_LENGTH = 200
DEFAULT_PERMISSION_PATTERN = r"^[a-z][a-z0-9_]*([.:][a-z][a-z0-9_]*)*$"

Failure = tuple[str, str]
Validator = Callable[[object], Iterable[Failure]]

_NIL = UUID(int=0)


def _not_empty_id(field: str, value: UUID) -> Iterator[Failure]:
    if value == _NIL:
        yield field, f"'{field}' must not be empty."


def _name(value: str) -> Iterator[Failure]:
    if not value or not value.strip():
        yield "name", "'name' must not be empty."
    elif len(value) > NAME_MAX_LENGTH:
        yield "name", f"'name' must be {NAME_MAX_LENGTH} characters or fewer."


def _description(value: str | None) -> Iterator[Failure]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        yield (
            "description",
            f"'description' must be {DESCRIPTION_MAX_LENGTH} characters or fewer.",
        )


def _permission_list(values: list[str], pattern: re.Pattern[str]) -> Iterator[Failure]:
    for i, action in enumerate(values):
        field = f"permissions[{i}]"
        if not action or not action.strip():
            yield field, "Permission must not be empty."
        elif len(action) > PERMISSION_MAX_LENGTH:
            yield field, f"Permission must be {PERMISSION_MAX_LENGTH} characters or fewer."
        elif not pattern.fullmatch(action):
            yield (
                field,
                "Permission must be a lowercase action such as 'reports.view' "
                "or 'document:read'.",
            )


class RequestValidators:
    """Validators for every command and query, keyed by request type."""

    def __init__(self, permission_pattern: str = DEFAULT_PERMISSION_PATTERN) -> None:
        self._permission_re = re.compile(permission_pattern)

    def create_role(self, command: CreateRoleCommand) -> Iterator[Failure]:
        yield from _name(command.name)
        yield from _description(command.description)
        yield from _not_empty_id("scopeId", command.scope.id)
        yield from _permission_list(command.permissions, self._permission_re)

    def update_role(self, command: UpdateRoleCommand) -> Iterator[Failure]:
        yield from _not_empty_id("id", command.id)
        yield from _name(command.name)
        yield from _description(command.description)
        yield from _permission_list(command.permissions, self._permission_re)

    def assign_role(self, command: AssignRoleCommand) -> Iterator[Failure]:
        yield from _not_empty_id("roleId", command.role_id)
        yield from _not_empty_id("userId", command.user_id)
        yield from _not_empty_id("scopeId", command.scope.id)
        yield from _not_empty_id("assignedBy", command.assigned_by)

    def revoke_role(self, command: RevokeRoleCommand) -> Iterator[Failure]:
        yield from _not_empty_id("roleId", command.role_id)
        yield from _not_empty_id("userId", command.user_id)
        yield from _not_empty_id("scopeId", command.scope_id)

    def check_permission(self, query: CheckPermissionQuery) -> Iterator[Failure]:
        yield from _not_empty_id("userId", query.user_id)
        yield from _not_empty_id("scopeId", query.scope_id)
        if not query.permission or not query.permission.strip():
            yield "permission", "'permission' must not be empty."
        elif len(query.permission) > PERMISSION_MAX_LENGTH:
            yield (
                "permission",
                f"'permission' must be {PERMISSION_MAX_LENGTH} characters or fewer.",
            )

    def get_user_permissions(self, query: GetUserPermissionsQuery) -> Iterator[Failure]:
        yield from _not_empty_id("userId", query.user_id)
        yield from _not_empty_id("scopeId", query.scope_id)

    def table(self) -> dict[type, list[Validator]]:
        return {
            CreateRoleCommand: [self.create_role],
            UpdateRoleCommand: [self.update_role],
            AssignRoleCommand: [self.assign_role],
            RevokeRoleCommand: [self.revoke_role],
            CheckPermissionQuery: [self.check_permission],
            GetUserPermissionsQuery: [self.get_user_permissions],
        }


def run_validators(request: object, validators: Iterable[Validator]) -> None:
    """Run all validators; raise ValidationError grouping failures by field."""
    errors: dict[str, list[str]] = {}
    for validator in validators:
        for field, message in validator(request):
            errors.setdefault(field, []).append(message)
    if errors:
        raise ValidationError(errors)
