"""API tests for the per-client rate limit (SlowAPI, ahead of routing)."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from listings.core.config import get_settings
from listings.core.limiter import RATE_LIMIT_MESSAGE
from listings.infrastructure.persistence.database import get_db
from listings.main import create_app


@pytest.fixture
async def limited_client(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[AsyncClient]:
    """Client for an app allowing two requests per window."""
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    monkeypatch.setenv("RATE_LIMIT_MAX", "2")
    get_settings.cache_clear()
    try:
        app = create_app()
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()
    # Requests here never reach the store.
    app.dependency_overrides[get_db] = lambda: None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_requests_over_limit_get_429_envelope(limited_client: AsyncClient) -> None:
    for _ in range(2):
        assert (await limited_client.get("/api/health")).status_code == 200

    response = await limited_client.get("/api/health")

    assert response.status_code == 429
    assert response.json() == {"success": False, "data": None, "message": RATE_LIMIT_MESSAGE}


async def test_limit_is_checked_before_validation(limited_client: AsyncClient) -> None:
    """Once over the limit, even an invalid body gets 429 rather than 400."""
    for _ in range(2):
        response = await limited_client.post("/api/auth/login", json={})
        assert response.status_code == 400

    response = await limited_client.post("/api/auth/login", json={})

    assert response.status_code == 429
    assert response.json()["message"] == RATE_LIMIT_MESSAGE
