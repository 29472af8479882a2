"""Domain value objects."""

from accesscontrol.domain.value_objects.scope import (
    OrganizationScope,
    Scope,
    ScopeType,
    WorkspaceScope,
    scope_of,
)

__all__ = [
    "OrganizationScope",
    "Scope",
    "ScopeType",
    "WorkspaceScope",
    "scope_of",
]
