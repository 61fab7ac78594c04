"""Lifespan middleware - opens pools and starts health monitor on startup."""

from typing import Any

from loguru import logger
from psycopg_pool import AsyncConnectionPool

from permission_service.application.ports import PermissionStore
from permission_service.infrastructure.health.monitor import HealthMonitor


class LifespanMiddleware:
    """Middleware that owns the connection pools and the health monitor.

    Startup fails if the database cannot be reached within ``connect_timeout``
    seconds, so the process never serves without a store. ``probe_pool``, when
    given, is the store's separate pool for health pings.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        store: PermissionStore,
        monitor: HealthMonitor,
        connect_timeout: float = 10.0,
        probe_pool: AsyncConnectionPool | None = None,
    ) -> None:
        self._pools = [pool] if probe_pool is None else [pool, probe_pool]
        self._store = store
        self._monitor = monitor
        self._connect_timeout = connect_timeout

    async def _close_pools(self) -> None:
        for pool in self._pools:
            await pool.close()

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pools, verify the database and start probing."""
        try:
            for pool in self._pools:
                await pool.open(wait=True, timeout=self._connect_timeout)
            await self._store.ping()
        except Exception:
            await self._close_pools()
            raise
        logger.info("connected to permission database")
        self._monitor.start()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Stop probing and close pools."""
        await self._monitor.stop()
        await self._close_pools()
