"""
VerseNotes Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures time around call_next and logs method, path, status,
       duration, request ID and client IP.

Log level by outcome:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    Application failures are HTTP 200 with success=false, so they log at
    INFO here; the exception handlers in main.py log the failure reason.

What we DON'T log: request bodies (they contain passwords).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from versenotes.middleware.request_id import request_id_var

logger = logging.getLogger("versenotes.access")

# Probed every few seconds by orchestrators; logging them drowns real traffic
QUIET_PATHS = {"/api/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
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
