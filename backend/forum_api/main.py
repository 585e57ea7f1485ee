"""
Forum Comments API: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn forum_api.main:app`) or the `forum-api` console script.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  RequestID → Logging → CORS → Errors   │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────────────────┐ ┌──────────────────┐   │
    │  │ GET/POST /comments      │ │ GET /health      │   │
    │  │ GET/PATCH/DELETE /{id}  │ │                  │   │
    │  └─────────────────────────┘ └──────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Database→500       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging → create store client → ping store
    Shutdown: close store client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from forum_api import __version__
from forum_api.config import settings
from forum_api.database import create_store
from forum_api.exceptions import (
    DatabaseError,
    ForumAPIError,
    NotFoundError,
    ValidationError,
)
from forum_api.middleware.errors import UnhandledErrorMiddleware
from forum_api.middleware.logging import RequestLoggingMiddleware
from forum_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from forum_api.routes import comments, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] forum_api.services.comment_service: Listing all comments
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party loggers that log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Create the shared store client on startup and close it on shutdown.

    A failed startup ping is logged but does not stop the server: requests
    fail individually with 500 and /health reports the store as
    disconnected until it becomes reachable.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Forum Comments API %s starting up...", __version__)

    store = create_store(settings)
    app.state.store = store

    try:
        await store.ping()
        logger.info("Connected to MongoDB (%s)", store)
    except PyMongoError as e:
        logger.error("MongoDB is not reachable at startup: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Forum Comments API shutting down...")
    await store.close()
    app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

        ValidationError  → 400 Bad Request
        NotFoundError    → 404 Not Found
        DatabaseError    → 500 Internal Server Error
        ForumAPIError    → 500 Internal Server Error

    Anything else is rendered by UnhandledErrorMiddleware.

    Server-side details (driver errors, context) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(ForumAPIError)
    async def handle_app_error(request: Request, exc: ForumAPIError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. The store client is attached
             by the lifespan, so building the app performs no network I/O.
    """
    app = FastAPI(
        title="Forum Comments API",
        description="CRUD service for forum comments stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition:
    #   RequestID → Logging → CORS → UnhandledError

    # Innermost, so unexpected-error 500s still pass through CORS
    app.add_middleware(UnhandledErrorMiddleware)

    # Permissive CORS: every origin, method and header. Credentials are only
    # allowed for an explicit origin list ("*" cannot carry credentials).
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(comments.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    uvicorn.run(
        "forum_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
