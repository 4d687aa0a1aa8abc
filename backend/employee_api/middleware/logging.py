"""
Employee API - Request Logging Middleware
==========================================

What:  One access-log line per HTTP request.
Why:   Shows which CRUD calls were made, how they ended and how long they took.
How:   Measures the time around call_next() and logs method, path, status,
       duration, request ID and client IP.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Log levels by status:
    5xx → ERROR    (server problem, e.g. MongoDB unreachable)
    4xx → WARNING  (client problem, e.g. missing fields, unknown employee)
    else → INFO

What we DON'T log: request bodies (employee records are personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from employee_api.middleware.request_id import request_id_var

logger = logging.getLogger("employee_api.access")

# Probed every few seconds by orchestrators; logging them drowns everything else
SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    """Map an HTTP status to the level its access line is logged at."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration for every non-health request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors still get their access line before propagating
            self._log_access(request, 500, started)
            raise

        self._log_access(request, response.status_code, started)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, started: float) -> None:
        elapsed_ms = round((time.monotonic() - started) * 1000, 1)
        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": status,
            "duration_ms": elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(status),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            fields,
            extra=fields,
        )
