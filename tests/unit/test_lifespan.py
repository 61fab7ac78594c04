"""LifespanMiddleware tests."""

import pytest

from permission_service.application.permission_controller import PermissionController
from permission_service.domain.exceptions import Unavailable
from permission_service.infrastructure.health.monitor import (
    HealthMonitor,
    HealthStatus,
    ServingStatus,
)
from permission_service.interfaces.api.middleware.lifespan import LifespanMiddleware

from tests.conftest import FakePermissionStore


class FakePool:
    def __init__(self) -> None:
        self.opened_with: dict | None = None
        self.closed = False

    async def open(self, wait: bool = False, timeout: float = 30.0) -> None:
        self.opened_with = {"wait": wait, "timeout": timeout}

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_startup_opens_pool_and_starts_monitor(
    controller: PermissionController, fake_store: FakePermissionStore
) -> None:
    pool = FakePool()
    status = HealthStatus()
    monitor = HealthMonitor(controller, status, interval=60.0, ping_timeout=1.0)
    lifespan = LifespanMiddleware(pool, fake_store, monitor, connect_timeout=5.0)

    await lifespan.process_startup({}, {})
    try:
        assert pool.opened_with == {"wait": True, "timeout": 5.0}
        await monitor.check_once()
        assert status.get() is ServingStatus.SERVING
    finally:
        await lifespan.process_shutdown({}, {})

    assert pool.closed is True


@pytest.mark.asyncio
async def test_startup_fails_when_database_unreachable(
    controller: PermissionController, fake_store: FakePermissionStore
) -> None:
    """A failed startup ping closes the pools it opened."""
    fake_store.down = True
    pool, probe_pool = FakePool(), FakePool()
    monitor = HealthMonitor(controller, HealthStatus())
    lifespan = LifespanMiddleware(pool, fake_store, monitor, probe_pool=probe_pool)

    with pytest.raises(Unavailable):
        await lifespan.process_startup({}, {})

    assert pool.closed is True
    assert probe_pool.closed is True


@pytest.mark.asyncio
async def test_probe_pool_opened_and_closed_with_main_pool(
    controller: PermissionController, fake_store: FakePermissionStore
) -> None:
    pool, probe_pool = FakePool(), FakePool()
    monitor = HealthMonitor(controller, HealthStatus(), interval=60.0, ping_timeout=1.0)
    lifespan = LifespanMiddleware(pool, fake_store, monitor, probe_pool=probe_pool)

    await lifespan.process_startup({}, {})
    assert probe_pool.opened_with is not None
    await lifespan.process_shutdown({}, {})

    assert pool.closed is True
    assert probe_pool.closed is True
