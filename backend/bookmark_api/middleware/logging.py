"""
Bookmarks API — Access Log Middleware
======================================

What:  One log line per HTTP request: method, path, status, duration, request id.
Why:   Uvicorn's access log has no request id and no duration.
How:   Times call_next() and logs at a level chosen from the status code.

What we log vs what we DON'T log:
    ✅ method, path, status, duration, client IP, request id,
       whether credentials were presented
    ❌ request bodies (untrusted markup), the token itself
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookmark_api.middleware.request_id import request_id_var

access_logger = logging.getLogger("bookmark_api.access")

# Probes hit these every few seconds
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access line once the response is ready."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        entry = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
            "credentials": "authorization" in request.headers,
        }
        access_logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] "
            "from %(client_ip)s (credentials=%(credentials)s)",
            entry,
            extra=entry,
        )
        return response
