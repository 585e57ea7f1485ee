"""
Forum Comments API: Request Logging Middleware
===============================================

What:  One access log line per request, keyed by the comment operation.
How:   After the router has matched, reads the route from the ASGI scope and
       logs its name (list_comments, update_comment, ...), its path template
       and the `comment_id` path parameter as separate fields, so log queries
       can group by operation or follow one comment across requests.

Example lines:
    2024-01-15T12:00:00 [INFO] forum_api.access: update_comment PATCH /comments/{comment_id} comment=65a4f0c2e1b2c3d4e5f60718 -> 200 in 3.2ms [a1b2c3d4]
    2024-01-15T12:00:01 [WARNING] forum_api.access: unmatched GET /favicon.ico -> 404 in 0.4ms [9f8e7d6c]

Request bodies (comment text) are never logged.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from forum_api.middleware.request_id import request_id_var

logger = logging.getLogger("forum_api.access")

# Polled by orchestrators every few seconds
SKIPPED_PATHS = {"/health"}


def route_fields(request: Request) -> Dict[str, Any]:
    """
    Operation name, path template and comment id for a routed request.

    Only meaningful once the router has run; before that (or for paths no
    route matched) the operation is "unmatched" and the raw path is used.
    """
    route = request.scope.get("route")
    return {
        "operation": getattr(route, "name", None) or "unmatched",
        "route": getattr(route, "path", None) or request.url.path,
        "comment_id": request.path_params.get("comment_id"),
    }


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs the operation, route, comment id, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        fields = route_fields(request)
        fields.update(
            method=request.method,
            status=response.status_code,
            duration_ms=elapsed_ms,
            request_id=request_id_var.get(""),
            client_ip=request.client.host if request.client else "unknown",
        )

        target = fields["route"]
        if fields["comment_id"]:
            target = f"{target} comment={fields['comment_id']}"

        logger.log(
            level_for_status(fields["status"]),
            "%s %s %s -> %d in %.1fms [%s]",
            fields["operation"],
            fields["method"],
            target,
            fields["status"],
            elapsed_ms,
            fields["request_id"],
            extra=fields,
        )
        return response
