"""Auth middleware - introspects bearer tokens or runs the request as anonymous."""

from dataclasses import dataclass

import falcon.asgi

from accesscontrol.infrastructure.auth.keycloak_provider import KeycloakProvider
from accesscontrol.interfaces.api.errors import Unauthorized
from accesscontrol.request_context import set_actor_id

ANONYMOUS = "anonymous"


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user.

    Without a configured provider every request is anonymous. With one, a
    bearer token must introspect as active or the request fails with 401;
    requests without a token stay anonymous.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method == "OPTIONS":
            return
        user = RequestUser(user_id=ANONYMOUS)
        auth = req.get_header("Authorization")
        if self._keycloak and auth:
            if not auth.startswith("Bearer "):
                raise Unauthorized("Authorization header must use the Bearer scheme.")
            oidc_user = await self._keycloak.decode_token_async(auth[7:])
            if oidc_user is None:
                raise Unauthorized("Bearer token is invalid or expired.")
            user = RequestUser(
                user_id=oidc_user.user_id,
                email=oidc_user.email,
                username=oidc_user.username,
            )
        req.context.user = user
        set_actor_id(None if user.user_id == ANONYMOUS else user.user_id)
