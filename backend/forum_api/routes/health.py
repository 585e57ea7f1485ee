"""
Forum Comments API: Health Check Route
========================================

What:  Health check endpoint for Docker health checks and load balancers.
How:   Pings the document store and reports its connectivity.

Status levels:
    - healthy:   store answered the ping (HTTP 200)
    - unhealthy: store unreachable or never initialized (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from forum_api import __version__
from forum_api.database import get_store
from forum_api.exceptions import DatabaseError
from forum_api.schemas.comment import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Document store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    db_status = "connected"

    try:
        store = get_store(request)
        await store.ping()
    except (DatabaseError, PyMongoError) as e:
        db_status = "disconnected"
        logger.warning("Health check: document store unreachable: %s", str(e))

    body = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
