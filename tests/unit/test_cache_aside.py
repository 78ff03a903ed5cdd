"""Tests for CacheAside: read-through, invalidation and failure degradation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from listings.infrastructure.cache import CacheAside


async def test_get_or_compute_populates_on_miss(cache) -> None:
    aside = CacheAside(cache)
    compute = AsyncMock(return_value={"id": "p1"})

    first = await aside.get_or_compute("property:p1", compute, ttl=60)
    second = await aside.get_or_compute("property:p1", compute, ttl=60)

    assert first == second == {"id": "p1"}
    compute.assert_awaited_once()
    assert cache.ttls["property:p1"] == 60


async def test_get_or_compute_does_not_cache_none(cache) -> None:
    aside = CacheAside(cache)
    compute = AsyncMock(return_value=None)

    assert await aside.get_or_compute("user:u1", compute, ttl=60) is None
    assert cache.keys() == []


async def test_compute_errors_propagate_and_nothing_is_cached(cache) -> None:
    aside = CacheAside(cache)
    compute = AsyncMock(side_effect=LookupError("boom"))

    with pytest.raises(LookupError):
        await aside.get_or_compute("property:p1", compute, ttl=60)
    assert cache.keys() == []


async def test_without_backend_always_computes() -> None:
    aside = CacheAside(None)
    compute = AsyncMock(return_value=[1, 2])

    assert await aside.get_or_compute("favorites:u1", compute, ttl=60) == [1, 2]
    assert await aside.get_or_compute("favorites:u1", compute, ttl=60) == [1, 2]
    assert compute.await_count == 2
    assert aside.available is False
    await aside.invalidate("favorites:u1")
    await aside.invalidate_namespace("properties")


async def test_unavailable_backend_is_bypassed(cache) -> None:
    cache.available = False
    aside = CacheAside(cache)
    compute = AsyncMock(return_value={"a": 1})

    await aside.get_or_compute("user:u1", compute, ttl=60)
    assert cache.keys() == []


async def test_backend_read_failure_degrades_to_miss() -> None:
    backend = MagicMock()
    backend.is_available.return_value = True
    backend.get = AsyncMock(side_effect=RuntimeError("down"))
    backend.set = AsyncMock(return_value=True)
    aside = CacheAside(backend)

    value = await aside.get_or_compute("property:p1", AsyncMock(return_value={"x": 1}), ttl=5)

    assert value == {"x": 1}
    backend.set.assert_awaited_once_with("property:p1", {"x": 1}, ttl=5)


async def test_backend_write_and_delete_failures_are_swallowed() -> None:
    backend = MagicMock()
    backend.is_available.return_value = True
    backend.get = AsyncMock(return_value=None)
    backend.set = AsyncMock(side_effect=RuntimeError("down"))
    backend.delete = AsyncMock(side_effect=RuntimeError("down"))
    backend.delete_pattern = AsyncMock(side_effect=RuntimeError("down"))
    aside = CacheAside(backend)

    assert await aside.get_or_compute("k:1", AsyncMock(return_value=1), ttl=5) == 1
    await aside.invalidate("k:1")
    await aside.invalidate_namespace("properties")
    backend.delete_pattern.assert_awaited_once_with("properties:*")


async def test_invalidate_removes_exact_keys_only(cache) -> None:
    aside = CacheAside(cache)
    await cache.set("favorites:u1", [], ttl=60)
    await cache.set("favorites:u2", [], ttl=60)

    await aside.invalidate("favorites:u1")

    assert cache.keys() == ["favorites:u2"]


async def test_invalidate_namespace_removes_all_list_keys(cache) -> None:
    aside = CacheAside(cache)
    await cache.set('properties:{"page":1}', {}, ttl=60)
    await cache.set('properties:{"page":2}', {}, ttl=60)
    await cache.set("property:p1", {}, ttl=60)

    await aside.invalidate_namespace("properties")

    assert cache.keys() == ["property:p1"]
