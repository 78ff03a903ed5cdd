"""Cache-aside accessor used by every application service.

Read path: look up the key; on miss compute from the store and populate with
one atomic SETEX. Write path: callers mutate and commit the store first, then
invalidate the affected keys. Cache failures never reach the caller: a broken
or missing cache degrades to "always miss".
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from listings.core.constants import CACHE_KEY_SEP
from listings.infrastructure.cache.cache_protocol import CacheProtocol
from listings.infrastructure.cache.keys import namespace_pattern
from listings.shared.telemetry.telemetry import get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

T = TypeVar("T")


def _key_prefix(key: str) -> str:
    """Namespace part of a key (for span attributes; never the full key)."""
    head, _, rest = key.partition(CACHE_KEY_SEP)
    if head == "recommendations":
        return f"{head}{CACHE_KEY_SEP}{rest.partition(CACHE_KEY_SEP)[0]}"
    return head


class CacheAside:
    """Get / populate / invalidate protocol over an optional cache backend.

    With cache=None (Redis disabled or unreachable at startup) reads always
    miss and writes/invalidations are no-ops.
    """

    def __init__(self, cache: CacheProtocol | None) -> None:
        self._cache = cache

    @property
    def available(self) -> bool:
        if self._cache is None:
            return False
        try:
            return self._cache.is_available()
        except Exception:
            logger.exception("Cache availability check failed")
            return False

    async def read(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or cache failure."""
        if not self.available:
            return None
        try:
            return await self._cache.get(key)
        except Exception:
            logger.exception("Cache read failed for key %s; treating as miss", key)
            return None

    async def write(self, key: str, value: Any, ttl: int) -> None:
        """Store value under key for ttl seconds. Best effort."""
        if not self.available:
            return
        try:
            if not await self._cache.set(key, value, ttl=ttl):
                logger.warning("Cache write skipped for key %s", key)
        except Exception:
            logger.exception("Cache write failed for key %s", key)

    async def invalidate(self, *keys: str) -> None:
        """Delete exact keys. Best effort."""
        if not keys or not self.available:
            return
        try:
            if not await self._cache.delete(*keys):
                logger.warning("Cache invalidation failed for %s", ", ".join(keys))
        except Exception:
            logger.exception("Cache invalidation failed for %s", ", ".join(keys))

    async def invalidate_namespace(self, prefix: str) -> None:
        """Delete every key under prefix (e.g. all cached property lists). Best effort."""
        if not self.available:
            return
        pattern = namespace_pattern(prefix)
        try:
            await self._cache.delete_pattern(pattern)
        except Exception:
            logger.exception("Cache namespace invalidation failed for %s", pattern)

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        ttl: int,
    ) -> T:
        """Return the cached value for key, or compute, cache and return it.

        Exceptions from compute (store errors, not-found) propagate and
        nothing is cached. None results are returned but not cached.
        """
        with _tracer.start_as_current_span("cache.get_or_compute") as span:
            span.set_attribute("cache.namespace", _key_prefix(key))
            cached = await self.read(key)
            if cached is not None:
                span.set_attribute("cache.hit", True)
                return cached
            span.set_attribute("cache.hit", False)
            value = await compute()
            if value is not None:
                await self.write(key, value, ttl)
            return value
