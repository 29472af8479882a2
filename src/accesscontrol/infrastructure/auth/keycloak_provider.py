"""Keycloak OIDC provider for bearer token introspection."""

import asyncio
import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated caller from an introspected token."""

    user_id: str
    email: str | None = None
    username: str | None = None


class KeycloakProvider:
    """Validates bearer tokens against the realm's introspection endpoint."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect the token; None when it is inactive or Keycloak rejects it."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )

    async def decode_token_async(self, token: str) -> OIDCUser | None:
        # python-keycloak's introspect is a blocking HTTP call
        return await asyncio.to_thread(self.decode_token, token)
