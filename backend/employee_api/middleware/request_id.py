"""
Employee API - Request ID Middleware
=====================================

What:  Gives every request a short correlation ID and echoes it back.
Why:   Error bodies and access-log lines carry the same ID, so a client
       reporting "request 3f2a9c1e failed" points straight at the log entry.
How:   Reuses a client-supplied X-Request-ID header or generates one, stores it
       in a ContextVar and request.state, and sets it on the response.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID to each request.

    Behavior:
        1. Use the client's X-Request-ID header when present
        2. Otherwise generate the first 8 hex characters of a UUID4
        3. Store it for loggers (ContextVar) and handlers (request.state)
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
