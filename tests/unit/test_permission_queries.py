"""Unit tests for permission checks and effective permission listing."""

from uuid import uuid4

import pytest

from accesscontrol.application.use_cases.permission.check_permission import (
    CheckPermissionQuery,
    CheckPermissionUseCase,
)
from accesscontrol.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsQuery,
    GetUserPermissionsUseCase,
)
from accesscontrol.application.use_cases.role.create_role import (
    CreateRoleCommand,
    CreateRoleUseCase,
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
from accesscontrol.domain.value_objects import OrganizationScope, WorkspaceScope


async def _role(uow_factory, scope, name, permissions):
    result = await CreateRoleUseCase(uow_factory).execute(
        CreateRoleCommand(name=name, scope=scope, permissions=permissions)
    )
    return result.value


async def _assign(uow_factory, role_id, user_id, scope):
    await AssignRoleUseCase(uow_factory).execute(
        AssignRoleCommand(role_id=role_id, user_id=user_id, scope=scope, assigned_by=uuid4())
    )


async def _check(uow_factory, user_id, scope_id, permission) -> bool:
    result = await CheckPermissionUseCase(uow_factory).execute(
        CheckPermissionQuery(user_id=user_id, scope_id=scope_id, permission=permission)
    )
    return result.has_permission


@pytest.mark.asyncio
async def test_assign_check_revoke_flow(uow_factory) -> None:
    """Granted while assigned, gone after revoke."""
    org = OrganizationScope(uuid4())
    user = uuid4()
    role = await _role(uow_factory, org, "R1", ["read"])

    await _assign(uow_factory, role.id, user, org)
    assert await _check(uow_factory, user, org.id, "read") is True

    await RevokeRoleUseCase(uow_factory).execute(
        RevokeRoleCommand(role_id=role.id, user_id=user, scope_id=org.id)
    )
    assert await _check(uow_factory, user, org.id, "read") is False


@pytest.mark.asyncio
async def test_check_returns_query_echo(uow_factory) -> None:
    user, scope_id = uuid4(), uuid4()
    result = await CheckPermissionUseCase(uow_factory).execute(
        CheckPermissionQuery(user_id=user, scope_id=scope_id, permission="read")
    )
    assert result.has_permission is False
    assert (result.user_id, result.scope_id, result.permission) == (user, scope_id, "read")


@pytest.mark.asyncio
async def test_check_is_exact_match_and_case_sensitive(uow_factory) -> None:
    org = OrganizationScope(uuid4())
    user = uuid4()
    role = await _role(uow_factory, org, "Reporter", ["reports.view"])
    await _assign(uow_factory, role.id, user, org)

    assert await _check(uow_factory, user, org.id, "reports.view") is True
    assert await _check(uow_factory, user, org.id, "reports") is False
    assert await _check(uow_factory, user, org.id, "Reports.View") is False


@pytest.mark.asyncio
async def test_org_assignment_does_not_grant_in_workspace(uow_factory) -> None:
    """No scope hierarchy: a workspace check ignores organization assignments."""
    org = OrganizationScope(uuid4())
    workspace = WorkspaceScope(uuid4())
    user = uuid4()
    role = await _role(uow_factory, org, "OrgAdmin", ["admin"])
    await _assign(uow_factory, role.id, user, org)

    assert await _check(uow_factory, user, workspace.id, "admin") is False


@pytest.mark.asyncio
async def test_role_update_takes_effect_for_existing_assignments(uow_factory) -> None:
    org = OrganizationScope(uuid4())
    user = uuid4()
    role = await _role(uow_factory, org, "Editor", ["read"])
    await _assign(uow_factory, role.id, user, org)

    await UpdateRoleUseCase(uow_factory).execute(
        UpdateRoleCommand(id=role.id, name="Editor", permissions=["write"])
    )

    assert await _check(uow_factory, user, org.id, "read") is False
    assert await _check(uow_factory, user, org.id, "write") is True


@pytest.mark.asyncio
async def test_user_permissions_is_distinct_union(uow_factory) -> None:
    org = OrganizationScope(uuid4())
    user = uuid4()
    viewer = await _role(uow_factory, org, "Viewer", ["read", "reports.view"])
    editor = await _role(uow_factory, org, "Editor", ["read", "write"])
    await _assign(uow_factory, viewer.id, user, org)
    await _assign(uow_factory, editor.id, user, org)

    actions = await GetUserPermissionsUseCase(uow_factory).execute(
        GetUserPermissionsQuery(user_id=user, scope_id=org.id)
    )
    assert sorted(actions) == ["read", "reports.view", "write"]


@pytest.mark.asyncio
async def test_user_without_assignments_has_no_permissions(uow_factory) -> None:
    actions = await GetUserPermissionsUseCase(uow_factory).execute(
        GetUserPermissionsQuery(user_id=uuid4(), scope_id=uuid4())
    )
    assert actions == []
