"""Tests for the /health endpoint."""

import pytest

from models.errors import StoreFault


@pytest.mark.asyncio
async def test_health_check(client):
    """GET /health should return healthy status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["store"] == "ok"
    assert data["store_backend"] == "memory"
    assert data["persist_policy"] == "sync"
    assert data["in_flight"] == 0
    assert data["persister"]["failed"] == 0


@pytest.mark.asyncio
async def test_health_reports_unreachable_store(client, store, monkeypatch):
    def unreachable():
        raise StoreFault("endpoint not reachable")

    monkeypatch.setattr(store, "check", unreachable)
    response = await client.get("/health")
    assert response.status_code == 503
    assert "not reachable" in response.json()["detail"]
