"""Request bodies and query strings, parsed with pydantic (camelCase on the wire)."""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from accesscontrol.application.use_cases.permission.check_permission import (
    CheckPermissionQuery,
)
from accesscontrol.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsQuery,
)
from accesscontrol.application.use_cases.role.create_role import CreateRoleCommand
from accesscontrol.application.use_cases.role.list_roles import ListRolesByScopeQuery
from accesscontrol.application.use_cases.role.update_role import UpdateRoleCommand
from accesscontrol.application.use_cases.role_assignment.assign_role import (
    AssignRoleCommand,
)
from accesscontrol.application.use_cases.role_assignment.revoke_role import (
    RevokeRoleCommand,
)
from accesscontrol.domain.value_objects import ScopeType, scope_of


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _scope_type(value: Any) -> ScopeType:
    if isinstance(value, ScopeType):
        return value
    if not isinstance(value, str):
        raise ValueError("must be 'Organization' or 'Workspace'")
    try:
        return ScopeType(value)
    except ValueError:
        raise ValueError("must be 'Organization' or 'Workspace'") from None


ScopeTypeParam = Annotated[ScopeType, BeforeValidator(_scope_type)]


class CreateRoleRequest(_Request):
    name: str
    description: str | None = None
    scope_id: UUID
    scope_type: ScopeTypeParam
    permissions: list[str] = Field(default_factory=list)

    def to_command(self) -> CreateRoleCommand:
        return CreateRoleCommand(
            name=self.name,
            scope=scope_of(self.scope_type, self.scope_id),
            description=self.description,
            permissions=list(self.permissions),
        )


class UpdateRoleRequest(_Request):
    name: str
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)

    def to_command(self, role_id: UUID) -> UpdateRoleCommand:
        return UpdateRoleCommand(
            id=role_id,
            name=self.name,
            description=self.description,
            permissions=list(self.permissions),
        )


class AssignRoleRequest(_Request):
    user_id: UUID
    scope_id: UUID
    scope_type: ScopeTypeParam
    assigned_by: UUID

    def to_command(self, role_id: UUID) -> AssignRoleCommand:
        return AssignRoleCommand(
            role_id=role_id,
            user_id=self.user_id,
            scope=scope_of(self.scope_type, self.scope_id),
            assigned_by=self.assigned_by,
        )


class RevokeRoleRequest(_Request):
    user_id: UUID
    scope_id: UUID

    def to_command(self, role_id: UUID) -> RevokeRoleCommand:
        return RevokeRoleCommand(
            role_id=role_id, user_id=self.user_id, scope_id=self.scope_id
        )


class ListRolesParams(_Request):
    scope_id: UUID
    scope_type: ScopeTypeParam

    def to_query(self) -> ListRolesByScopeQuery:
        return ListRolesByScopeQuery(scope_of(self.scope_type, self.scope_id))


class CheckPermissionParams(_Request):
    user_id: UUID
    scope_id: UUID
    permission: str

    def to_query(self) -> CheckPermissionQuery:
        return CheckPermissionQuery(
            user_id=self.user_id, scope_id=self.scope_id, permission=self.permission
        )


class UserPermissionsParams(_Request):
    scope_id: UUID

    def to_query(self, user_id: UUID) -> GetUserPermissionsQuery:
        return GetUserPermissionsQuery(user_id=user_id, scope_id=self.scope_id)
