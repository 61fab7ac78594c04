"""Request body size limit."""

import falcon
import falcon.asgi

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class BodyLimitMiddleware:
    """Rejects requests whose body is larger than ``max_bytes``.

    A declared Content-Length is checked up front. A body without one
    (chunked transfer) is read here, at most ``max_bytes + 1`` bytes, and kept
    in ``req.context.body`` for the resource.
    """

    def __init__(self, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    def _too_large(self) -> falcon.HTTPContentTooLarge:
        return falcon.HTTPContentTooLarge(
            title="Request body too large",
            description=f"limit is {self._max_bytes} bytes",
        )

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        length = req.content_length
        if length is not None:
            if length > self._max_bytes:
                raise self._too_large()
            return
        if req.method not in _BODY_METHODS:
            return

        chunks: list[bytes] = []
        size = 0
        async for chunk in req.stream:
            size += len(chunk)
            if size > self._max_bytes:
                raise self._too_large()
            chunks.append(chunk)
        req.context.body = b"".join(chunks)
