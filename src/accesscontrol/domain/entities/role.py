"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from accesscontrol.domain.entities.permission import Permission
from accesscontrol.domain.events import RoleCreated, RoleDeleted, RoleUpdated
from accesscontrol.domain.exceptions import DomainError
from accesscontrol.domain.value_objects import Scope


@dataclass
class Role:
    """Role - a named bundle of permission actions valid within one scope.

    Mutations that other services care about return the domain event they
    produce; the caller publishes it once the change is committed.
    """

    id: UUID
    name: str
    scope: Scope
    created_at: datetime
    description: str | None = None
    is_system: bool = False
    updated_at: datetime | None = None
    permissions: list[Permission] = field(default_factory=list)

    @classmethod
    def create(
        cls, name: str, description: str | None, scope: Scope
    ) -> tuple["Role", RoleCreated]:
        """Create a non-system role with no permissions."""
        role = cls(
            id=uuid4(),
            name=name,
            description=description,
            scope=scope,
            created_at=datetime.now(UTC),
        )
        return role, RoleCreated(role_id=role.id, role_name=role.name, scope=scope)

    @property
    def actions(self) -> list[str]:
        """Permission actions in insertion order."""
        return [p.action for p in self.permissions]

    def has_permission(self, action: str) -> bool:
        return any(p.action == action for p in self.permissions)

    def update(self, name: str, description: str | None) -> RoleUpdated:
        if self.is_system:
            raise DomainError("Cannot update system roles.")
        self.name = name
        self.description = description
        self.updated_at = datetime.now(UTC)
        return RoleUpdated(role_id=self.id, role_name=self.name)

    def add_permission(self, action: str) -> Permission:
        if self.is_system:
            raise DomainError("Cannot modify permissions of system roles.")
        if self.has_permission(action):
            raise DomainError(f"Permission '{action}' already exists in role.")
        permission = Permission.create(self.id, action)
        self.permissions.append(permission)
        return permission

    def remove_permission(self, action: str) -> None:
        if self.is_system:
            raise DomainError("Cannot modify permissions of system roles.")
        for i, p in enumerate(self.permissions):
            if p.action == action:
                del self.permissions[i]
                return
        raise DomainError(f"Permission '{action}' not found in role.")

    def sync_permissions(self, requested: list[str]) -> tuple[list[str], list[str]]:
        """Make the permission set equal to ``requested``.

        Returns (added, removed). Duplicates in ``requested`` are ignored.
        """
        wanted = list(dict.fromkeys(requested))
        current = self.actions
        removed = [a for a in current if a not in wanted]
        added = [a for a in wanted if a not in current]
        for action in removed:
            self.remove_permission(action)
        for action in added:
            self.add_permission(action)
        return added, removed

    def delete(self) -> RoleDeleted:
        if self.is_system:
            raise DomainError("Cannot delete system roles.")
        return RoleDeleted(role_id=self.id)
