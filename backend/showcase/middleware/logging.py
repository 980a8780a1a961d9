"""
Showcase Backend — Request Logging Middleware
==============================================

What:  One access log line per HTTP request with method, path, status,
       duration and request ID.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses request ID for correlation).

Log level follows the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
Static files and health checks are not logged.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies (contact form PII), uploaded file contents
"""

import logging
import time
from typing import Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from showcase.middleware.request_id import request_id_var

logger = logging.getLogger("showcase.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each API request and response.

    Duration is measured from middleware entry to response return, so it
    includes image processing and database time.
    """

    def __init__(self, app, skip_prefixes: Tuple[str, ...] = ("/api/health", "/uploads"), **kwargs):
        super().__init__(app, **kwargs)
        self.skip_prefixes = skip_prefixes

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(self.skip_prefixes):
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
