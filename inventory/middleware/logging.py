"""
Product Inventory API: Request Logging Middleware
=================================================

What:  One access-log line per HTTP request: method, path (with query
       string), status, duration, request ID and client address.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged by this middleware. The router logs the
full proxy event at INFO separately.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inventory.middleware.request_id import request_id_var

logger = logging.getLogger("inventory.access")

UNLOGGED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the HTTP transport; health probes are skipped."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        peer = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "[%s] %s %s → %d in %.1fms (%s)",
            rid,
            request.method,
            target,
            response.status_code,
            elapsed_ms,
            peer,
            extra={
                "request_id": rid,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
