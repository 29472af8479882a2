"""Pytest fixtures for access control tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from uuid import UUID, uuid4

import pytest

from accesscontrol.domain.entities import Role, RoleAssignment
from accesscontrol.domain.events import DomainEvent
from accesscontrol.domain.exceptions import Conflict
from accesscontrol.domain.value_objects import OrganizationScope, Scope, WorkspaceScope


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    def add_role(self, role: Role) -> Role:
        """Seed helper - store without uniqueness checks."""
        self._by_id[role.id] = role
        return role

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._by_id.get(role_id)

    async def list_by_scope(self, scope: Scope) -> list[Role]:
        return [r for r in self._by_id.values() if r.scope == scope]

    async def name_exists_in_scope(
        self, name: str, scope: Scope, exclude_role_id: UUID | None = None
    ) -> bool:
        return any(
            r.name == name and r.scope == scope and r.id != exclude_role_id
            for r in self._by_id.values()
        )

    async def create(self, role: Role) -> Role:
        if await self.name_exists_in_scope(role.name, role.scope):
            raise Conflict(f"Role with name '{role.name}' already exists in this scope.")
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)


class FakeRoleAssignmentRepository:
    """In-memory assignment repository; joins roles from the role repository."""

    def __init__(self, roles: FakeRoleRepository) -> None:
        self._roles = roles
        self._by_id: dict[UUID, RoleAssignment] = {}

    def _with_role(self, assignment: RoleAssignment) -> RoleAssignment:
        assignment.role = self._roles._by_id.get(assignment.role_id)
        return assignment

    async def get_by_id(self, assignment_id: UUID) -> RoleAssignment | None:
        a = self._by_id.get(assignment_id)
        return self._with_role(a) if a else None

    async def find(
        self, role_id: UUID, user_id: UUID, scope_id: UUID
    ) -> RoleAssignment | None:
        for a in self._by_id.values():
            if a.role_id == role_id and a.user_id == user_id and a.scope.id == scope_id:
                return self._with_role(a)
        return None

    async def exists(self, role_id: UUID, user_id: UUID, scope_id: UUID) -> bool:
        return await self.find(role_id, user_id, scope_id) is not None

    async def list_by_user_and_scope(
        self, user_id: UUID, scope_id: UUID
    ) -> list[RoleAssignment]:
        items = [
            self._with_role(a)
            for a in self._by_id.values()
            if a.user_id == user_id and a.scope.id == scope_id
        ]
        items.sort(key=lambda a: a.assigned_at)
        return items

    async def count_by_role(self, role_id: UUID) -> int:
        return sum(1 for a in self._by_id.values() if a.role_id == role_id)

    async def create(self, assignment: RoleAssignment) -> RoleAssignment:
        if await self.exists(assignment.role_id, assignment.user_id, assignment.scope.id):
            raise Conflict("Role assignment already exists.")
        self._by_id[assignment.id] = assignment
        return assignment

    async def delete(self, assignment_id: UUID) -> None:
        self._by_id.pop(assignment_id, None)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.assignments = FakeRoleAssignmentRepository(self.roles)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork; commits or rolls back like Postgres."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


class RecordingEventPublisher:
    """Collects published events in order."""

    def __init__(self) -> None:
        self.published: list[DomainEvent] = []

    async def publish(self, events: Sequence[DomainEvent]) -> None:
        self.published.extend(events)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.published]


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test, shared by every use case call."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def org_scope() -> OrganizationScope:
    return OrganizationScope(uuid4())


@pytest.fixture
def workspace_scope() -> WorkspaceScope:
    return WorkspaceScope(uuid4())
