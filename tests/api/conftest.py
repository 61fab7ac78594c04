"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from permission_service.application.permission_controller import PermissionController
from permission_service.infrastructure.health.monitor import HealthStatus
from permission_service.interfaces.api.app import create_app
from permission_service.interfaces.api.middleware.body_limit import BodyLimitMiddleware
from permission_service.interfaces.api.middleware.request_logging import (
    RequestLoggingMiddleware,
)
from permission_service.interfaces.api.resources.health import HealthResource
from permission_service.interfaces.api.resources.permissions import PermissionRpcResource


@pytest.fixture
def health_status() -> HealthStatus:
    return HealthStatus()


@pytest.fixture
def app(controller: PermissionController, health_status: HealthStatus):
    """Falcon ASGI app over the in-memory store, without lifespan."""
    return create_app(
        PermissionRpcResource(controller),
        HealthResource(health_status),
        middleware=[
            RequestLoggingMiddleware(["/v1/health"]),
            BodyLimitMiddleware(1024),
        ],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
