"""Scope - the organization or workspace a role or assignment is bound to."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class ScopeType(StrEnum):
    """Kinds of scope. Values match the wire and database representation."""

    ORGANIZATION = "Organization"
    WORKSPACE = "Workspace"

    @classmethod
    def _missing_(cls, value: object) -> "ScopeType | None":
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


@dataclass(frozen=True)
class OrganizationScope:
    """Binding to an organization owned by the directory service."""

    id: UUID

    @property
    def type(self) -> ScopeType:
        return ScopeType.ORGANIZATION


@dataclass(frozen=True)
class WorkspaceScope:
    """Binding to a workspace owned by the directory service."""

    id: UUID

    @property
    def type(self) -> ScopeType:
        return ScopeType.WORKSPACE


Scope = OrganizationScope | WorkspaceScope


def scope_of(scope_type: ScopeType | str, scope_id: UUID) -> Scope:
    """Build the scope variant for a (type, id) pair."""
    match ScopeType(scope_type):
        case ScopeType.ORGANIZATION:
            return OrganizationScope(scope_id)
        case ScopeType.WORKSPACE:
            return WorkspaceScope(scope_id)
