"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from permission_service.interfaces.api.errors import add_error_handlers
from permission_service.interfaces.api.resources.health import HealthResource
from permission_service.interfaces.api.resources.permissions import (
    PermissionRpcResource,
    add_rpc_routes,
)


def create_app(
    permission_resource: PermissionRpcResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    add_error_handlers(app)
    app.add_route("/v1/health", health_resource)
    add_rpc_routes(app, permission_resource)
    return app
