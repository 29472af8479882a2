"""Application DTOs."""

from accesscontrol.application.dto.command_result import CommandResult
from accesscontrol.application.dto.responses import (
    PermissionCheckResponse,
    RoleAssignmentResponse,
    RoleResponse,
)

__all__ = [
    "CommandResult",
    "PermissionCheckResponse",
    "RoleAssignmentResponse",
    "RoleResponse",
]
