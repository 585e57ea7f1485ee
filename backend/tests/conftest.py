"""
Forum Comments API: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_collection:    AsyncMock standing in for an AsyncCollection
    ├── memory_collection:  In-memory collection with real CRUD semantics
    ├── fake_store:         Store double exposing ping() and collection
    └── test_client:        HTTPX AsyncClient wired to memory_collection

No MongoDB server is needed: the app's store dependency is overridden and the
lifespan (which would open a real client) never runs under ASGITransport.
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "forum_test"
os.environ["STRICT_VALIDATION"] = "false"
os.environ["CORS_ORIGINS"] = "*"
os.environ["LOG_LEVEL"] = "WARNING"


class InMemoryCollection:
    """
    Minimal async collection covering the calls CommentService makes.

    Documents are deep-copied on the way in and out, like a real store.
    Set `fail_with` to an exception instance to make every call raise it.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _match(self, document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())

    async def _iterate(self, query):
        self._check()
        for document in list(self.documents):
            if self._match(document, query):
                yield copy.deepcopy(document)

    def find(self, query: Dict[str, Any]):
        return self._iterate(query)

    async def find_one(self, query: Dict[str, Any]):
        self._check()
        for document in self.documents:
            if self._match(document, query):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document: Dict[str, Any]):
        self._check()
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one_and_update(self, query, update, return_document=None):
        self._check()
        for document in self.documents:
            if self._match(document, query):
                document.update(update.get("$set", {}))
                return copy.deepcopy(document)
        return None

    async def delete_one(self, query: Dict[str, Any]):
        self._check()
        for index, document in enumerate(self.documents):
            if self._match(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def mock_collection():
    """
    Provides a mock async collection.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, ...}
        result = await service.get_comment(mock_collection, str(oid))
    """
    collection = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def memory_collection():
    """Provides an empty in-memory collection."""
    return InMemoryCollection()


@pytest.fixture
def fake_store(memory_collection):
    """Store double exposing what the health check uses (collection and ping)."""
    return SimpleNamespace(
        collection=memory_collection,
        ping=AsyncMock(return_value=None),
    )


@pytest_asyncio.fixture
async def test_client(memory_collection):
    """
    Provides an async HTTP test client backed by memory_collection.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/comments")
            assert response.status_code == 200
    """
    from forum_api.database import get_comments_collection
    from forum_api.main import app

    app.dependency_overrides[get_comments_collection] = lambda: memory_collection
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
