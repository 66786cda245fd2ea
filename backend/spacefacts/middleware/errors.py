"""
Space Facts API - Unhandled Error Middleware
=============================================

What:  Turns any exception that escaped the route and its exception handlers
       into 500 {"error": "Internal Server Error"}.
How:   Innermost application middleware. Starlette would otherwise answer
       from ServerErrorMiddleware, outside every user middleware, and the
       response would leave without X-Request-ID or CORS headers.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from spacefacts.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
