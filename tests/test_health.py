"""
MyGram Backend — Health Endpoint Tests
"""

import pytest

from mygram import __version__


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_database_reachable(self, test_client, db_engine, monkeypatch):
        monkeypatch.setattr("mygram.routes.health.engine", db_engine)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_health_needs_no_token(self, test_client, db_engine, monkeypatch):
        monkeypatch.setattr("mygram.routes.health.engine", db_engine)
        response = await test_client.get("/health")
        assert "www-authenticate" not in response.headers
