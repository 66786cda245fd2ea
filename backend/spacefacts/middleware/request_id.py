"""
Space Facts API - Request ID Middleware
========================================

What:  Assigns an id to each request and returns it in the X-Request-ID header.
How:   Reuses the client's X-Request-ID if sent, otherwise generates a short
       UUID; stores it in a ContextVar for loggers and on request.state for
       handlers.
When:  Outermost application middleware, so every later log line can use it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the inbound X-Request-ID header when present
        2. Otherwise generate the first 8 characters of a UUID4
        3. Expose it via request_id_var and request.state.request_id
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
