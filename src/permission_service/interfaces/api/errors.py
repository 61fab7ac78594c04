"""Error handlers mapping domain errors to HTTP responses."""

import falcon
import falcon.asgi
from loguru import logger

from permission_service.domain.exceptions import (
    AlreadyExists,
    InvalidArgument,
    NotFound,
    PermissionServiceError,
    Unavailable,
)
from permission_service.interfaces.api.resources.serialization import permission_to_dict

_STATUS = {
    InvalidArgument: falcon.HTTP_400,
    NotFound: falcon.HTTP_404,
    AlreadyExists: falcon.HTTP_409,
    Unavailable: falcon.HTTP_503,
}


async def handle_domain_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: PermissionServiceError,
    params: dict,
) -> None:
    resp.status = _STATUS.get(type(ex), falcon.HTTP_500)
    resp.media = {"code": ex.code, "message": str(ex)}
    if isinstance(ex, AlreadyExists):
        resp.media["permission"] = permission_to_dict(ex.existing)
    if isinstance(ex, Unavailable):
        logger.warning("{} {}: {}", req.method, req.path, ex)


async def handle_unexpected_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: Exception,
    params: dict,
) -> None:
    logger.opt(exception=ex).error("unhandled error in {} {}", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"code": "INTERNAL", "message": "internal server error"}


def add_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(PermissionServiceError, handle_domain_error)
