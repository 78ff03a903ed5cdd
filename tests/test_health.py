"""Smoke tests for health, envelope and middleware wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/health returns 200 in the envelope with cache status."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "ok"
    assert body["data"]["cache"] == "available"


async def test_health_reports_unavailable_cache(client: AsyncClient, cache) -> None:
    cache.available = False
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"]["cache"] == "unavailable"


async def test_unknown_route_returns_not_found_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not Found - /api/does-not-exist"


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.headers.get("x-request-id")


async def test_request_id_is_forwarded_when_safe(client: AsyncClient) -> None:
    response = await client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/health", headers={"X-Request-ID": "bad id with spaces"}
    )
    assert response.headers["x-request-id"] != "bad id with spaces"


async def test_security_headers_present(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert "strict-transport-security" in response.headers
