"""
Showcase Backend — Upload Size Limit Middleware
================================================

What:  Rejects request bodies larger than the upload limit before they are
       buffered.
How:   Two checks against max_upload_size plus a small allowance for
       multipart boundaries and the text fields that travel with the image:
       1. A declared Content-Length above the limit is refused before any
          of the body is read.
       2. Every body chunk passing through `receive` is counted, so chunked
          requests without a Content-Length stop being read as soon as they
          cross the limit.
Who:   Applied to every request. Plain ASGI middleware rather than
       BaseHTTPMiddleware: it has to wrap `receive`, which BaseHTTPMiddleware
       does not expose.

When the running count crosses the limit, the wrapped `receive` raises
BodyTooLarge. Whatever the application makes of that (a form parsing error,
an exception) is discarded and replaced by the size-limit response.

Response on rejection:
    HTTP 400 with the same JSON error shape as every other validation error
"""

import logging
from typing import Optional

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from showcase.middleware.request_id import request_id_var
from showcase.services.upload_service import size_limit_message

logger = logging.getLogger(__name__)

# Room for multipart boundaries, part headers and the name/description fields
MULTIPART_OVERHEAD = 64 * 1024


class BodyTooLarge(Exception):
    """Raised from the wrapped `receive` once the body exceeds the limit."""

    def __init__(self, received: int):
        super().__init__(f"request body exceeded limit after {received} bytes")
        self.received = received


class UploadSizeLimitMiddleware:
    """
    Configuration:
        max_upload_size: largest accepted file in bytes (Settings.max_upload_size)
    """

    BODY_METHODS = {"POST", "PUT", "PATCH"}

    def __init__(self, app: ASGIApp, max_upload_size: int):
        self.app = app
        self.max_upload_size = max_upload_size
        self.max_body_size = max_upload_size + MULTIPART_OVERHEAD

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in self.BODY_METHODS:
            await self.app(scope, receive, send)
            return

        declared = self._declared_length(Headers(scope=scope))
        if declared is not None and declared > self.max_body_size:
            logger.warning(
                "Rejected %s %s: declared body of %d bytes exceeds limit of %d",
                scope["method"],
                scope["path"],
                declared,
                self.max_body_size,
            )
            await self._reject(scope, receive, send, declared)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    exceeded = True
                    raise BodyTooLarge(received)
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            if exceeded:
                # Replaced by the size-limit response below
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception:
            if not exceeded:
                raise

        if exceeded:
            logger.warning(
                "Rejected %s %s: streamed body passed limit of %d bytes",
                scope["method"],
                scope["path"],
                self.max_body_size,
            )
            if not response_started:
                await self._reject(scope, receive, send, None)

    @staticmethod
    def _declared_length(headers: Headers) -> Optional[int]:
        header = headers.get("content-length")
        try:
            return int(header) if header is not None else None
        except ValueError:
            return None

    async def _reject(
        self, scope: Scope, receive: Receive, send: Send, content_length: Optional[int]
    ) -> None:
        details = {"max_size": self.max_upload_size}
        if content_length is not None:
            details["content_length"] = content_length
        response = JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": size_limit_message(self.max_upload_size),
                "details": details,
                "request_id": request_id_var.get(""),
            },
        )
        await response(scope, receive, send)
