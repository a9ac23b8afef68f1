"""
Blog Backend - Health Check Tests
===================================
"""

import pytest

from app import __version__


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": __version__,
            "database": "connected",
        }

    @pytest.mark.asyncio
    async def test_unhealthy_when_ping_fails(self, test_client, store, monkeypatch):
        async def failed_ping():
            return False

        monkeypatch.setattr(store, "ping", failed_ping)

        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"
