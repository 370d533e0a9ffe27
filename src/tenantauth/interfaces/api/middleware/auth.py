"""Auth middleware - resolves the bearer token to a stored Actor."""

import logging

import falcon.asgi

from tenantauth.infrastructure.auth.keycloak_provider import KeycloakProvider

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Sets req.context.user to the Actor behind the bearer token, or None.

    Role, company and permissions are always read from the user store; token
    claims only identify the subject.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None, unit_of_work_factory: type) -> None:
        self._keycloak = keycloak_provider
        self._uow_factory = unit_of_work_factory

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        identity = self._keycloak.decode_token(auth[7:])
        if identity is None:
            return
        async with self._uow_factory() as uow:
            actor = await uow.users.get_by_id(identity.subject)
        if actor is None:
            logger.info("Token subject %s has no user record", identity.subject)
            return
        req.context.user = actor
