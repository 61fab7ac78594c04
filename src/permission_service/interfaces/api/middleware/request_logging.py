"""Request logging middleware - one log line per request with timing."""

import time
from uuid import uuid4

import falcon
import falcon.asgi
from loguru import logger


class RequestLoggingMiddleware:
    """Logs method, path, status and duration of each request.

    Requests to one of ``ignore_paths``, or below it, are not logged, so
    frequent health probes stay out of the logs. ``/v1/healthz`` is not below
    ``/v1/health``.
    """

    def __init__(self, ignore_paths: list[str] | None = None) -> None:
        self._ignore_paths = tuple(p.rstrip("/") for p in ignore_paths or ())

    def _ignored(self, path: str) -> bool:
        return any(path == p or path.startswith(p + "/") for p in self._ignore_paths)

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.started_at = time.perf_counter()
        req.context.request_id = req.get_header("X-Request-ID") or uuid4().hex
        resp.set_header("X-Request-ID", req.context.request_id)

    async def process_response(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource,
        req_succeeded: bool,
    ) -> None:
        if self._ignored(req.path):
            return
        started_at = getattr(req.context, "started_at", None)
        duration_ms = (time.perf_counter() - started_at) * 1000 if started_at else 0.0
        log = logger.bind(request_id=getattr(req.context, "request_id", None))
        status = falcon.http_status_to_code(resp.status)
        message = "{} {} -> {} in {:.1f}ms"
        if status >= 500:
            log.error(message, req.method, req.path, status, duration_ms)
        elif status >= 400:
            log.warning(message, req.method, req.path, status, duration_ms)
        else:
            log.info(message, req.method, req.path, status, duration_ms)
