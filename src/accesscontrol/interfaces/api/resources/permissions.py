"""Permission query API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from accesscontrol.application.dispatcher import Dispatcher
from accesscontrol.interfaces.api.schemas import CheckPermissionParams, UserPermissionsParams


class PermissionCheckResource:
    """GET /api/v1/permissions/check?userId=&scopeId=&permission=."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        params = CheckPermissionParams.model_validate(req.params)
        result = await self._dispatcher.dispatch(params.to_query())
        resp.media = result.to_json()
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """GET /api/v1/users/{user_id}/permissions?scopeId= - effective permissions."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: UUID
    ) -> None:
        params = UserPermissionsParams.model_validate(req.params)
        resp.media = await self._dispatcher.dispatch(params.to_query(user_id))
        resp.status = falcon.HTTP_200
