"""Keycloak OIDC provider for access token introspection."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class TokenIdentity:
    """Identity asserted by a valid access token."""

    subject: str
    email: str | None = None
    email_verified: bool = False
    username: str | None = None
    realm_roles: list[str] = field(default_factory=list)


class KeycloakProvider:
    """Keycloak OIDC - introspects bearer tokens.

    The token only says who the caller is. Role, company and permissions always
    come from the user store, never from token claims.
    """

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

    def decode_token(self, token: str) -> TokenIdentity | None:
        """Introspect token, return identity or None when inactive or rejected."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return TokenIdentity(
            subject=token_info["sub"],
            email=token_info.get("email"),
            email_verified=bool(token_info.get("email_verified", False)),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
