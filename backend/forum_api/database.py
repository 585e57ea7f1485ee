"""
Forum Comments API: Document Store Client
===========================================

What:  Async MongoDB client wrapper and the FastAPI dependencies that hand it
       to route handlers.
How:   One `CommentStore` (wrapping `pymongo.AsyncMongoClient`) is created in
       the application lifespan and attached to `app.state.store`. Handlers
       receive it, or its comments collection, through `Depends()`.
Who:   main.py (lifespan), routes (dependencies), health check (ping).
When:  Client created once at startup and closed at shutdown; dependencies
       resolve per request.

Connection Pooling:
    The driver keeps its own pool (max size from settings) and is safe to
    share between concurrent requests, so handlers never lock around it.
    `tz_aware=True` makes stored datetimes come back as UTC-aware values.
"""

import logging

from fastapi import Depends, Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from forum_api.config import Settings
from forum_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class CommentStore:
    """
    Long-lived handle on the comments collection.

    Attributes:
        client:      The shared AsyncMongoClient (owns the connection pool)
        collection:  `<database>.<collection>` holding one document per comment
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        collection_name: str,
        **client_options,
    ):
        # Connection is lazy: no network I/O happens until the first operation
        self.client: AsyncMongoClient = AsyncMongoClient(uri, tz_aware=True, **client_options)
        self.database_name = database_name
        self.collection_name = collection_name
        self.collection: AsyncCollection = self.client[database_name][collection_name]

    async def ping(self) -> None:
        """Round-trips a `ping` command; raises PyMongoError if unreachable."""
        await self.client.admin.command("ping")

    async def close(self) -> None:
        """Closes all pooled connections."""
        await self.client.close()

    def __repr__(self) -> str:
        return f"<CommentStore({self.database_name}.{self.collection_name})>"


def create_store(settings: Settings) -> CommentStore:
    """Builds the store from settings. Called once by the lifespan handler."""
    logger.info(
        "Creating document store client for %s.%s",
        settings.mongo_database,
        settings.mongo_collection,
    )
    return CommentStore(
        settings.mongo_uri,
        settings.mongo_database,
        settings.mongo_collection,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        maxPoolSize=settings.mongo_max_pool_size,
    )


# ── Dependencies ──────────────────────────────────────────────────────────
def get_store(request: Request) -> CommentStore:
    """
    FastAPI dependency returning the application's CommentStore.

    Raises:
        DatabaseError: The lifespan never attached a store (startup failed or
                       the app is running without its lifespan).
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise DatabaseError(
            message="The comment store is not available.",
            context={"reason": "store not initialized"},
        )
    return store


def get_comments_collection(store: CommentStore = Depends(get_store)) -> AsyncCollection:
    """FastAPI dependency returning the comments collection."""
    return store.collection
