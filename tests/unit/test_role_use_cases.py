"""Unit tests for role use cases."""

from uuid import uuid4

import pytest

from accesscontrol.application.use_cases.role.create_role import (
    CreateRoleCommand,
    CreateRoleUseCase,
)
from accesscontrol.application.use_cases.role.delete_role import (
    DeleteRoleCommand,
    DeleteRoleUseCase,
)
from accesscontrol.application.use_cases.role.get_role import GetRoleQuery, GetRoleUseCase
from accesscontrol.application.use_cases.role.list_roles import (
    ListRolesByScopeQuery,
    ListRolesByScopeUseCase,
)
from accesscontrol.application.use_cases.role.update_role import (
    UpdateRoleCommand,
    UpdateRoleUseCase,
)
from accesscontrol.application.use_cases.role_assignment.assign_role import (
    AssignRoleCommand,
    AssignRoleUseCase,
)
from accesscontrol.application.use_cases.role_assignment.revoke_role import (
    RevokeRoleCommand,
    RevokeRoleUseCase,
)
from accesscontrol.domain.entities import Role, RoleAssignment
from accesscontrol.domain.exceptions import Conflict, DomainError, NotFound
from accesscontrol.domain.value_objects import OrganizationScope, WorkspaceScope

from tests.conftest import FakeUnitOfWork


def _names(result) -> list[str]:
    return [e.name for e in result.events]


async def _create(uow_factory, scope, name="Editor", permissions=("read",)):
    use_case = CreateRoleUseCase(unit_of_work_factory=uow_factory)
    result = await use_case.execute(
        CreateRoleCommand(name=name, scope=scope, permissions=list(permissions))
    )
    return result.value


# --- CreateRoleUseCase ---


@pytest.mark.asyncio
async def test_create_role_persists_and_returns_event(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    result = await CreateRoleUseCase(uow_factory).execute(
        CreateRoleCommand(name="Editor", scope=org_scope, permissions=["read", "write"])
    )
    role = result.value

    assert role.name == "Editor"
    assert role.scope_id == org_scope.id
    assert role.scope_type == "Organization"
    assert role.permissions == ["read", "write"]
    assert role.is_system is False
    assert await fake_uow.roles.get_by_id(role.id) is not None
    assert fake_uow.commits == 1
    assert _names(result) == ["RoleCreated"]
    assert result.events[0].role_id == role.id


@pytest.mark.asyncio
async def test_create_role_duplicate_name_in_scope_conflicts(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    await _create(uow_factory, org_scope)

    with pytest.raises(Conflict, match="already exists in this scope"):
        await _create(uow_factory, org_scope)
    assert fake_uow.rollbacks == 1
    assert fake_uow.commits == 1


@pytest.mark.asyncio
async def test_same_name_allowed_in_other_scope(uow_factory, org_scope) -> None:
    """Uniqueness is per scope, and the scope kind is part of the scope."""
    await _create(uow_factory, org_scope)
    other = await _create(uow_factory, WorkspaceScope(org_scope.id))
    assert other.scope_type == "Workspace"


@pytest.mark.asyncio
async def test_create_role_duplicate_permission_is_domain_error(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    with pytest.raises(DomainError, match="already exists in role"):
        await _create(uow_factory, org_scope, permissions=["read", "read"])
    assert fake_uow.commits == 0


# --- UpdateRoleUseCase ---


@pytest.mark.asyncio
async def test_update_role_renames_and_syncs_permissions(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    created = await _create(uow_factory, org_scope, permissions=["read", "write"])
    use_case = UpdateRoleUseCase(uow_factory)

    result = await use_case.execute(
        UpdateRoleCommand(
            id=created.id, name="Author", description="Writes", permissions=["write", "publish"]
        )
    )

    assert result.value.name == "Author"
    assert result.value.description == "Writes"
    assert sorted(result.value.permissions) == ["publish", "write"]
    assert result.value.updated_at is not None
    assert _names(result) == ["RoleUpdated"]


@pytest.mark.asyncio
async def test_update_role_with_same_permissions_changes_nothing(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    created = await _create(uow_factory, org_scope, permissions=["read", "write"])
    before = [p.id for p in (await fake_uow.roles.get_by_id(created.id)).permissions]
    use_case = UpdateRoleUseCase(uow_factory)

    command = UpdateRoleCommand(id=created.id, name="Editor", permissions=["read", "write"])
    await use_case.execute(command)
    await use_case.execute(command)

    after = [p.id for p in (await fake_uow.roles.get_by_id(created.id)).permissions]
    assert after == before


@pytest.mark.asyncio
async def test_update_role_keeping_own_name_is_not_conflict(uow_factory, org_scope) -> None:
    created = await _create(uow_factory, org_scope)
    use_case = UpdateRoleUseCase(uow_factory)
    result = await use_case.execute(UpdateRoleCommand(id=created.id, name="Editor"))
    assert result.value.permissions == []


@pytest.mark.asyncio
async def test_update_role_to_taken_name_conflicts(uow_factory, org_scope) -> None:
    await _create(uow_factory, org_scope, name="Viewer")
    editor = await _create(uow_factory, org_scope, name="Editor")
    use_case = UpdateRoleUseCase(uow_factory)

    with pytest.raises(Conflict):
        await use_case.execute(UpdateRoleCommand(id=editor.id, name="Viewer"))


@pytest.mark.asyncio
async def test_update_missing_role_not_found(uow_factory) -> None:
    use_case = UpdateRoleUseCase(uow_factory)
    with pytest.raises(NotFound, match="Role"):
        await use_case.execute(UpdateRoleCommand(id=uuid4(), name="X"))


@pytest.mark.asyncio
async def test_update_system_role_is_domain_error(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    role, _ = Role.create("Owner", None, org_scope)
    role.is_system = True
    fake_uow.roles.add_role(role)
    use_case = UpdateRoleUseCase(uow_factory)

    with pytest.raises(DomainError, match="system roles"):
        await use_case.execute(UpdateRoleCommand(id=role.id, name="Boss"))


# --- DeleteRoleUseCase ---


@pytest.mark.asyncio
async def test_delete_role_removes_it(uow_factory, fake_uow: FakeUnitOfWork, org_scope) -> None:
    created = await _create(uow_factory, org_scope)
    result = await DeleteRoleUseCase(uow_factory).execute(DeleteRoleCommand(created.id))

    assert await fake_uow.roles.get_by_id(created.id) is None
    assert _names(result) == ["RoleDeleted"]


@pytest.mark.asyncio
async def test_delete_role_with_assignments_is_refused(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    created = await _create(uow_factory, org_scope)
    assignment, _ = RoleAssignment.create(created.id, uuid4(), org_scope, uuid4())
    await fake_uow.assignments.create(assignment)

    with pytest.raises(DomainError, match="active assignments"):
        await DeleteRoleUseCase(uow_factory).execute(DeleteRoleCommand(created.id))
    assert await fake_uow.roles.get_by_id(created.id) is not None


@pytest.mark.asyncio
async def test_delete_role_succeeds_once_assignment_revoked(
    uow_factory, fake_uow: FakeUnitOfWork, org_scope
) -> None:
    created = await _create(uow_factory, org_scope)
    user_id = uuid4()
    await AssignRoleUseCase(uow_factory).execute(
        AssignRoleCommand(role_id=created.id, user_id=user_id, scope=org_scope, assigned_by=uuid4())
    )
    delete = DeleteRoleUseCase(uow_factory)

    with pytest.raises(DomainError, match="active assignments"):
        await delete.execute(DeleteRoleCommand(created.id))

    await RevokeRoleUseCase(uow_factory).execute(
        RevokeRoleCommand(role_id=created.id, user_id=user_id, scope_id=org_scope.id)
    )
    result = await delete.execute(DeleteRoleCommand(created.id))

    assert _names(result) == ["RoleDeleted"]
    assert await fake_uow.roles.get_by_id(created.id) is None
    with pytest.raises(NotFound):
        await GetRoleUseCase(uow_factory).execute(GetRoleQuery(created.id))


@pytest.mark.asyncio
async def test_delete_missing_role_not_found(uow_factory) -> None:
    with pytest.raises(NotFound):
        await DeleteRoleUseCase(uow_factory).execute(DeleteRoleCommand(uuid4()))


# --- Queries ---


@pytest.mark.asyncio
async def test_get_role_by_id(uow_factory, org_scope) -> None:
    created = await _create(uow_factory, org_scope)
    found = await GetRoleUseCase(uow_factory).execute(GetRoleQuery(created.id))
    assert found == created

    with pytest.raises(NotFound):
        await GetRoleUseCase(uow_factory).execute(GetRoleQuery(uuid4()))


@pytest.mark.asyncio
async def test_list_roles_by_scope_filters_and_sorts(uow_factory, org_scope) -> None:
    await _create(uow_factory, org_scope, name="Viewer")
    await _create(uow_factory, org_scope, name="Admin")
    await _create(uow_factory, OrganizationScope(uuid4()), name="Other")

    roles = await ListRolesByScopeUseCase(uow_factory).execute(ListRolesByScopeQuery(org_scope))
    assert [r.name for r in roles] == ["Admin", "Viewer"]

    empty = await ListRolesByScopeUseCase(uow_factory).execute(
        ListRolesByScopeQuery(WorkspaceScope(org_scope.id))
    )
    assert empty == []
