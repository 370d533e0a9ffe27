"""Health check endpoints."""

from collections.abc import Awaitable, Callable

import falcon.asgi

from tenantauth import __version__


class HealthResource:
    """Liveness and readiness endpoints.

    readiness is an optional async probe (see pool_readiness); without one the
    service reports ready as soon as it answers.
    """

    def __init__(self, readiness: Callable[[], Awaitable[bool]] | None = None) -> None:
        self._readiness = readiness

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok", "version": __version__}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - 503 while the database is unreachable."""
        if self._readiness is not None and not await self._readiness():
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
