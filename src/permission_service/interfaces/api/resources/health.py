"""Health check endpoint."""

import falcon.asgi

from permission_service.infrastructure.health.monitor import HealthStatus, ServingStatus


class HealthResource:
    """Serving status published by the health monitor."""

    def __init__(self, status: HealthStatus) -> None:
        self._status = status

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - 200 when SERVING, 503 otherwise."""
        status = self._status.get()
        resp.media = {"status": status.value}
        resp.status = falcon.HTTP_200 if status is ServingStatus.SERVING else falcon.HTTP_503
