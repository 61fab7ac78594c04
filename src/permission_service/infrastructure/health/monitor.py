"""Background health monitor publishing the serving status."""

import asyncio
from enum import StrEnum
from typing import Protocol

from loguru import logger


class ServingStatus(StrEnum):
    """Externally visible health status."""

    UNKNOWN = "UNKNOWN"
    SERVING = "SERVING"
    NOT_SERVING = "NOT_SERVING"


class HealthStatus:
    """Process-wide published serving status.

    UNKNOWN until the first probe completes. Updates replace the value in a
    single assignment, so readers always see a whole status.
    """

    def __init__(self) -> None:
        self._status = ServingStatus.UNKNOWN

    def get(self) -> ServingStatus:
        return self._status

    def set(self, status: ServingStatus) -> None:
        self._status = status


class HealthChecker(Protocol):
    async def health_check(self, timeout: float) -> bool: ...


class HealthMonitor:
    """Probes the store every ``interval`` seconds and publishes the result.

    A single probe flips the status, there is no debouncing. The loop runs
    until ``stop()`` at shutdown and never touches request handling.
    """

    def __init__(
        self,
        checker: HealthChecker,
        status: HealthStatus,
        interval: float = 3.0,
        ping_timeout: float = 10.0,
    ) -> None:
        self._checker = checker
        self._status = status
        self._interval = interval
        self._ping_timeout = ping_timeout
        self._task: asyncio.Task | None = None

    async def check_once(self) -> ServingStatus:
        """Run one probe and publish its outcome."""
        healthy = await self._checker.health_check(self._ping_timeout)
        new = ServingStatus.SERVING if healthy else ServingStatus.NOT_SERVING
        old = self._status.get()
        self._status.set(new)
        if new != old:
            if new is ServingStatus.SERVING:
                logger.info("health status changed {} -> {}", old, new)
            else:
                logger.warning("health status changed {} -> {}", old, new)
        return new

    async def run(self) -> None:
        """Probe forever."""
        while True:
            await self.check_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="health-monitor")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
