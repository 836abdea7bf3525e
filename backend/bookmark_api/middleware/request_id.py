"""
Bookmarks API — Request ID Middleware
======================================

What:  Assigns each request a short correlation id and echoes it back.
Why:   Lets a client quote the id from an error response and lets us find
       every log line belonging to that request.
How:   Takes X-Request-ID from the client when present, otherwise generates
       one; stores it in a ContextVar and in request.state; sets the
       response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagates or generates X-Request-ID for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Client ids are truncated so a hostile header cannot bloat the logs
        rid = request.headers.get("X-Request-ID", "")[:MAX_CLIENT_ID_LENGTH]
        if not rid:
            rid = uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
