"""
Forum Comments API: Unhandled Error Middleware
===============================================

What:  Turns any exception that escaped the route handlers and the
       application exception handlers into a generic JSON 500.
How:   Added before CORSMiddleware, so it runs inside it: the 500 passes
       back out through CORS and the request-ID middleware and gets the
       same headers as every other response. (A FastAPI handler registered
       for `Exception` runs in Starlette's outermost ServerErrorMiddleware,
       outside CORS, and its responses carry no CORS headers.)

Known errors (ForumAPIError subclasses) never reach this point; they are
rendered by the handlers in main.py.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from forum_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Catch-all 500 with a request ID; the stack trace goes to the server log."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error in %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_server_error",
                    "message": "An unexpected error occurred. Please try again later.",
                    "request_id": rid,
                },
            )
