"""Domain entities."""

from accesscontrol.domain.entities.permission import Permission
from accesscontrol.domain.entities.role import Role
from accesscontrol.domain.entities.role_assignment import RoleAssignment

__all__ = [
    "Permission",
    "Role",
    "RoleAssignment",
]
