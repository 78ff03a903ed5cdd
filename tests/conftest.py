"""Pytest configuration and fixtures for listings.

Environment is set before any listings import so Settings validation passes.
Each test gets its own SQLite database (aiosqlite) in tmp_path and an
in-memory cache double; the app's get_db and get_cache_aside dependencies
are overridden to use them.
"""

import fnmatch
import json
import os
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key-do-not-use-in-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./listings-test.db")
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from listings.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from listings.api.v1.dependencies import get_cache_aside  # noqa: E402
from listings.infrastructure.cache import CacheAside  # noqa: E402
from listings.infrastructure.persistence.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    get_db,
    init_models,
)
from listings.main import create_app  # noqa: E402

Register = Callable[..., Awaitable[dict[str, Any]]]


class InMemoryCache:
    """CacheProtocol double: JSON round-trip, per-key TTL, glob pattern deletion."""

    def __init__(self) -> None:
        self.store: dict[str, tuple[str, float]] = {}
        self.ttls: dict[str, int] = {}
        self.available = True

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        entry = self.store.get(key)
        if entry is None:
            return None
        payload, expires_at = entry
        if time.monotonic() >= expires_at:
            del self.store[key]
            return None
        return json.loads(payload)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.store[key] = (json.dumps(value), time.monotonic() + ttl)
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys: str) -> bool:
        for key in keys:
            self.store.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        matched = [k for k in self.store if fnmatch.fnmatchcase(k, pattern)]
        for key in matched:
            del self.store[key]
        return len(matched)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self.store if k.startswith(prefix))


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """Fresh SQLite database with the full schema (foreign keys enforced)."""
    built = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'listings.db'}")
    await init_models(built)
    yield built
    await built.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession], cache: InMemoryCache
) -> FastAPI:
    application = create_app()

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_cache_aside] = lambda: CacheAside(cache)
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client: AsyncClient) -> Register:
    """Register a user; returns {"user", "token", "headers"}."""

    async def _register(
        email: str, name: str = "Test User", password: str = "secret123"
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "user": data["user"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


def property_body(**overrides: Any) -> dict[str, Any]:
    """Valid property request body; keyword arguments replace top-level fields."""
    body: dict[str, Any] = {
        "title": "Sunny apartment",
        "description": "Two bedrooms close to the park",
        "price": 250000,
        "location": {
            "address": "12 Main St",
            "city": "Austin",
            "state": "TX",
            "zipCode": "78701",
            "coordinates": {"lat": 30.27, "lng": -97.74},
        },
        "propertyType": "apartment",
        "bedrooms": 2,
        "bathrooms": 1.5,
        "area": 900,
        "amenities": ["pool", "gym"],
        "images": ["https://img.example.com/1.jpg"],
    }
    body.update(overrides)
    return body


@pytest.fixture
def create_property(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """POST a property as the given user; returns the created property payload."""

    async def _create(headers: dict[str, str], **overrides: Any) -> dict[str, Any]:
        response = await client.post(
            "/api/properties", json=property_body(**overrides), headers=headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["property"]

    return _create


@pytest.fixture
def make_property_body() -> Callable[..., dict[str, Any]]:
    return property_body
