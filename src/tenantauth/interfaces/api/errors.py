"""Mapping of domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from tenantauth.domain.exceptions import AuthorizationError, NotFound, ValidationError

logger = logging.getLogger(__name__)


async def handle_authorization_error(req, resp, ex: AuthorizationError, params) -> None:
    resp.status = falcon.code_to_http_status(ex.status_code)
    resp.media = ex.to_dict()


async def handle_validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": "INVALID_INPUT", "message": str(ex), "status": 400}


async def handle_not_found(req, resp, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": "NOT_FOUND", "message": str(ex), "status": 404}


async def handle_unexpected(req, resp, ex: Exception, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Register handlers. Falcon picks the most specific one for each exception,
    so HTTPError keeps its built-in handler."""
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(AuthorizationError, handle_authorization_error)
    app.add_error_handler(ValidationError, handle_validation_error)
    app.add_error_handler(NotFound, handle_not_found)
