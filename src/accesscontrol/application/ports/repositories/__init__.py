"""Repository ports."""

from accesscontrol.application.ports.repositories.role_assignment_repository import (
    RoleAssignmentRepository,
)
from accesscontrol.application.ports.repositories.role_repository import RoleRepository

__all__ = [
    "RoleAssignmentRepository",
    "RoleRepository",
]
