"""API tests for health endpoints and request middleware."""

from httpx import AsyncClient

import homehub.infrastructure.storage.sqlite as sqlite_storage


class TestHealthAPI:
    """Tests for health checks."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"]

    async def test_root_health(self, client: AsyncClient):
        assert (await client.get("/health")).json()["status"] == "healthy"

    async def test_db_health(self, client: AsyncClient, monkeypatch):
        async def fake_check():
            return {"db_path": "test.db", "pool_size": 1, "reminders": 3}

        monkeypatch.setattr(sqlite_storage, "check_database", fake_check)

        data = (await client.get("/api/health/db")).json()

        assert data["database"]["available"] is True
        assert data["database"]["details"]["reminders"] == 3

    async def test_db_health_unavailable(self, client: AsyncClient, monkeypatch):
        async def failing_check():
            raise OSError("disk unavailable")

        monkeypatch.setattr(sqlite_storage, "check_database", failing_check)

        data = (await client.get("/api/health/db")).json()

        assert data["status"] == "unhealthy"
        assert data["database"]["error"] == "disk unavailable"


class TestRequestMiddleware:
    """Tests for request ID and timing headers."""

    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/api/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_request_id_generated(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert len(response.headers["X-Request-ID"]) == 8
