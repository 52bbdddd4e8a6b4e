"""Integration tests for health endpoints."""

import pytest
from httpx import AsyncClient

from journal.core.permissions.catalog import catalog_cache


pytestmark = pytest.mark.integration


async def test_liveness(client: AsyncClient):
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


async def test_readiness(client: AsyncClient, seeded):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ready",
        "checks": {"database": "ok", "permissions": "ok"},
    }


async def test_unseeded_catalog_not_ready(client: AsyncClient):
    response = await client.get("/health/ready")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "degraded"
    assert body["checks"]["database"] == "ok"
    assert body["checks"]["permissions"] == (
        "missing 44 default permissions; run journal-admin sync-permissions"
    )


async def test_readiness_leaves_catalog_cache_alone(client: AsyncClient, seeded):
    catalog_cache.invalidate()
    await client.get("/health/ready")

    assert not catalog_cache.is_loaded


async def test_info_lists_permission_model(client: AsyncClient):
    response = await client.get("/info")

    body = response.json()
    assert body["actions"] == ["CREATE", "READ", "UPDATE", "DELETE"]
    assert "editorialboard" in body["resources"]
    assert body["default_roles"] == ["Super Admin", "Admin", "Editor", "Author", "Viewer"]


async def test_request_id_header(client: AsyncClient):
    response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
