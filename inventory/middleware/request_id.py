"""
Product Inventory API: Request ID Middleware
============================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   The ID lives in a ContextVar, so the router's error bodies and log
       lines can read it without it being passed around. The Lambda handler
       sets the same variable from the invocation's aws_request_id.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests in one event loop each see their own ID.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """Short random ID; 8 hex chars are enough to correlate log lines."""
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Uses the client's X-Request-ID when present, otherwise generates one,
    and echoes it on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
