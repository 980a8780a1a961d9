"""
Showcase Backend — Request ID Middleware
=========================================

What:  Assigns an ID to each incoming request and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar so loggers and exception handlers can read
       it without access to the Request object.
Who:   Applied to every request via Starlette middleware.

The admin panel can quote the ID from an error body; the same ID appears on
every server log line for that request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the request, or generate an 8-char UUID prefix
        2. Store it in request_id_var and request.state.request_id
        3. Echo it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
