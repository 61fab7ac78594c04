"""Application entry point and composition root."""

from falcon.asgi import App
from loguru import logger

from permission_service import __version__
from permission_service.application.permission_controller import PermissionController
from permission_service.config import Settings, get_settings
from permission_service.infrastructure.health.monitor import HealthMonitor, HealthStatus
from permission_service.infrastructure.persistence.postgres.connection import create_pool
from permission_service.infrastructure.persistence.postgres.permission_store import (
    PostgresPermissionStore,
)
from permission_service.interfaces.api.app import create_app
from permission_service.interfaces.api.middleware.body_limit import BodyLimitMiddleware
from permission_service.interfaces.api.middleware.lifespan import LifespanMiddleware
from permission_service.interfaces.api.middleware.request_logging import (
    RequestLoggingMiddleware,
)
from permission_service.interfaces.api.resources.health import HealthResource
from permission_service.interfaces.api.resources.permissions import PermissionRpcResource
from permission_service.logging_setup import configure_logging


def create_permission_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        timeout=settings.store_timeout,
    )
    # Health pings never wait on a request connection.
    probe_pool = create_pool(
        settings.database_url,
        min_size=1,
        max_size=1,
        timeout=settings.ping_timeout,
    )
    store = PostgresPermissionStore(
        pool, timeout=settings.store_timeout, probe_pool=probe_pool
    )
    controller = PermissionController(store)

    status = HealthStatus()
    monitor = HealthMonitor(
        controller,
        status,
        interval=settings.health_check_interval,
        ping_timeout=settings.ping_timeout,
    )

    return create_app(
        PermissionRpcResource(controller),
        HealthResource(status),
        middleware=[
            RequestLoggingMiddleware(settings.ignored_log_paths()),
            BodyLimitMiddleware(settings.max_request_bytes),
            LifespanMiddleware(
                pool,
                store,
                monitor,
                connect_timeout=settings.database_connect_timeout,
                probe_pool=probe_pool,
            ),
        ],
    )


def main() -> None:
    """CLI entry point - serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    app = create_permission_app(settings)
    logger.info("permission-service v{} listening on {}:{}", __version__, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, access_log=False)
