"""
Forum Comments API: Application Wiring Tests
==============================================

What:  Health check, CORS headers, request IDs, access log, and configuration.
How:   Health tests attach a fake store to app.state (the lifespan does not
       run under ASGITransport).
"""

import logging
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from forum_api.config import Settings
from forum_api.main import app


class TestHealth:

    @pytest.fixture(autouse=True)
    def restore_store(self):
        previous = getattr(app.state, "store", None)
        yield
        app.state.store = previous

    @pytest.mark.asyncio
    async def test_healthy(self, test_client, fake_store):
        app.state.store = fake_store
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        fake_store.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_unreachable(self, test_client, fake_store):
        fake_store.ping = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        app.state.store = fake_store
        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_store_not_initialized(self, test_client):
        app.state.store = None
        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestCors:

    @pytest.mark.asyncio
    async def test_allow_origin_on_every_response(self, test_client):
        response = await test_client.get("/comments", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_preflight_allows_patch(self, test_client):
        response = await test_client.options(
            "/comments/abc",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "PATCH",
            },
        )
        assert response.status_code == 200
        assert "PATCH" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_cors_headers(self, test_client, memory_collection):
        memory_collection.fail_with = RuntimeError("cursor exploded")
        response = await test_client.get("/comments", headers={"Origin": "http://example.com"})
        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert "exploded" not in body["message"]
        assert body["request_id"] == response.headers["x-request-id"]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/comments")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get("/comments", headers={"X-Request-ID": "trace-42"})
        assert response.headers["x-request-id"] == "trace-42"


class TestAccessLog:

    @pytest.fixture(autouse=True)
    def capture(self, caplog):
        caplog.set_level(logging.INFO, logger="forum_api.access")
        self.caplog = caplog

    def _access_records(self):
        return [r for r in self.caplog.records if r.name == "forum_api.access"]

    @pytest.mark.asyncio
    async def test_logs_operation_route_and_comment_id(self, test_client):
        comment_id = str(ObjectId())
        await test_client.patch(f"/comments/{comment_id}", json={"comment": "x"})

        [record] = self._access_records()
        assert record.operation == "update_comment"
        assert record.route == "/comments/{comment_id}"
        assert record.comment_id == comment_id
        assert record.status == 404
        assert record.levelno == logging.WARNING
        assert "update_comment PATCH /comments/{comment_id} comment=" in record.getMessage()

    @pytest.mark.asyncio
    async def test_collection_route_has_no_comment_id(self, test_client):
        await test_client.post("/comments", json={"comment": "secret text"})

        [record] = self._access_records()
        assert record.operation == "create_comment"
        assert record.route == "/comments"
        assert record.comment_id is None
        assert "secret text" not in record.getMessage()

    @pytest.mark.asyncio
    async def test_unmatched_path_logs_raw_path(self, test_client):
        await test_client.get("/favicon.ico")

        [record] = self._access_records()
        assert record.operation == "unmatched"
        assert record.route == "/favicon.ico"

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client):
        await test_client.get("/health")
        assert self._access_records() == []


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ["MONGO_URI", "MONGO_DATABASE", "STRICT_VALIDATION", "CORS_ORIGINS", "LOG_LEVEL"]:
            monkeypatch.delenv(name, raising=False)
        defaults = Settings(_env_file=None)
        assert defaults.mongo_uri == "mongodb://mongo:27017"
        assert defaults.mongo_database == "forum"
        assert defaults.mongo_collection == "comments"
        assert defaults.backend_port == 1313
        assert defaults.strict_validation is False
        assert defaults.cors_origins_list == ["*"]

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="chatty")

    def test_cors_origins_split(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]
