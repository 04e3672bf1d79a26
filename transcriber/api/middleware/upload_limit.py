"""
Request body cap for uploads.

Starlette spools a multipart body completely before the route sees the
file, so the route's own size check only runs after the whole transfer.
``UploadSizeLimitMiddleware`` answers 413 as soon as the declared
``Content-Length``, or the bytes received so far, pass the cap.
"""

import logging
from typing import Any

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

from transcriber.api.middleware.error_handler import error_body
from transcriber.core.exceptions import AudioTooLargeError

logger = logging.getLogger(__name__)

# Room for the multipart boundary and part headers around the file
MULTIPART_OVERHEAD = 64 * 1024

_BODY_METHODS = {"POST", "PUT", "PATCH"}


class UploadSizeLimitMiddleware:
    """ASGI middleware that stops reading a request body past ``max_mb``."""

    def __init__(self, app: Any, max_mb: int) -> None:
        self.app = app
        self.max_mb = max_mb
        self.max_bytes = max_mb * 1024 * 1024 + MULTIPART_OVERHEAD

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http" or scope.get("method") not in _BODY_METHODS:
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            logger.warning("Rejected %s: declared body of %s bytes", scope.get("path"), declared)
            await self._reject(scope, receive, send)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> dict:
            nonlocal received, exceeded
            if exceeded:
                return {"type": "http.disconnect"}
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    # The body parser sees a disconnect and gives up
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: dict) -> None:
            nonlocal response_started
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception:
            if not exceeded or response_started:
                raise
            logger.debug("Body parser stopped after the upload cap")

        if exceeded and not response_started:
            logger.warning("Rejected %s: body passed %d bytes", scope.get("path"), self.max_bytes)
            await self._reject(scope, receive, send)

    async def _reject(self, scope: dict, receive: Any, send: Any) -> None:
        response = JSONResponse(status_code=413, content=error_body(AudioTooLargeError(self.max_mb)))
        await response(scope, receive, send)
