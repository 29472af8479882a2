"""Response DTOs - serialized as camelCase JSON."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from accesscontrol.domain.entities import Role, RoleAssignment
from accesscontrol.domain.value_objects import ScopeType


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class RoleResponse(_Response):
    id: UUID
    name: str
    description: str | None
    scope_id: UUID
    scope_type: ScopeType
    is_system: bool
    permissions: list[str]
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            scope_id=role.scope.id,
            scope_type=role.scope.type,
            is_system=role.is_system,
            permissions=role.actions,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class RoleAssignmentResponse(_Response):
    id: UUID
    role_id: UUID
    role_name: str
    user_id: UUID
    scope_id: UUID
    scope_type: ScopeType
    assigned_at: datetime
    assigned_by: UUID

    @classmethod
    def from_entity(cls, assignment: RoleAssignment) -> "RoleAssignmentResponse":
        if assignment.role is None:
            raise ValueError("RoleAssignment loaded without its role")
        return cls(
            id=assignment.id,
            role_id=assignment.role_id,
            role_name=assignment.role.name,
            user_id=assignment.user_id,
            scope_id=assignment.scope.id,
            scope_type=assignment.scope.type,
            assigned_at=assignment.assigned_at,
            assigned_by=assignment.assigned_by,
        )


class PermissionCheckResponse(_Response):
    has_permission: bool
    user_id: UUID
    scope_id: UUID
    permission: str
