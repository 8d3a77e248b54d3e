"""API tests for health endpoints."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from reorder import __version__
from reorder.api.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthAPI:
    async def test_api_health(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["uptime_seconds"] >= 0

    async def test_root_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_request_id_headers(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_db_health_unavailable(self, client: AsyncClient):
        with patch(
            "reorder.infrastructure.storage.sqlite.get_connection_pool",
            side_effect=RuntimeError("no database"),
        ):
            response = await client.get("/api/health/db")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"]["available"] is False
        assert data["database"]["error"] == "no database"

    async def test_root_info(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["parts"] == "/api/parts"
