"""Role and role assignment API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from accesscontrol.application.dispatcher import Dispatcher
from accesscontrol.application.use_cases.role.delete_role import DeleteRoleCommand
from accesscontrol.application.use_cases.role.get_role import GetRoleQuery
from accesscontrol.interfaces.api.schemas import (
    AssignRoleRequest,
    CreateRoleRequest,
    ListRolesParams,
    RevokeRoleRequest,
    UpdateRoleRequest,
)

ROLES_PATH = "/api/v1/roles"


class RolesResource:
    """GET/POST /api/v1/roles - list roles in a scope, create a role."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        params = ListRolesParams.model_validate(req.params)
        roles = await self._dispatcher.dispatch(params.to_query())
        resp.media = [r.to_json() for r in roles]
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = CreateRoleRequest.model_validate(await req.get_media())
        result = await self._dispatcher.dispatch(body.to_command())
        resp.media = result.value.to_json()
        resp.location = f"{ROLES_PATH}/{result.value.id}"
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/DELETE /api/v1/roles/{role_id}."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        role = await self._dispatcher.dispatch(GetRoleQuery(role_id))
        resp.media = role.to_json()
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        """Rename the role and replace its permission set."""
        body = UpdateRoleRequest.model_validate(await req.get_media())
        result = await self._dispatcher.dispatch(body.to_command(role_id))
        resp.media = result.value.to_json()
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        await self._dispatcher.dispatch(DeleteRoleCommand(role_id))
        resp.status = falcon.HTTP_204


class RoleAssignmentsResource:
    """POST/DELETE /api/v1/roles/{role_id}/assignments - assign or revoke."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        body = AssignRoleRequest.model_validate(await req.get_media())
        result = await self._dispatcher.dispatch(body.to_command(role_id))
        resp.media = result.value.to_json()
        resp.status = falcon.HTTP_201

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: UUID
    ) -> None:
        """Revoke; user and scope come from the JSON body."""
        body = RevokeRoleRequest.model_validate(await req.get_media())
        await self._dispatcher.dispatch(body.to_command(role_id))
        resp.status = falcon.HTTP_204
