"""Redis-backed cache for the listings API.

Holds JSON payloads under the keys built in listings.infrastructure.cache.keys:
property lists, single properties, per-user favorites and recommendations,
and user projections. Every backend failure is logged and degrades to a miss
(reads) or a no-op (writes, deletes). A dropped connection gets one reconnect
and one retry; the cache never fails a request.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from listings.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNLINK_CHUNK_SIZE = 500
_CONNECTION_ERRORS = (redis.ConnectionError, redis.TimeoutError)


class CacheService:
    """Async Redis cache implementing CacheProtocol.

    Call connect() at startup and disconnect() at shutdown (see
    listings.core.lifespan). Values are stored as JSON with SETEX.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional client for tests or DI. When given, the
                service counts as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Open the connection and PING. On failure the cache stays off."""
        if self.redis is not None:
            return
        client = redis.Redis.from_url(
            self.settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except _CONNECTION_ERRORS as e:
            logger.warning("Redis unreachable at %s (%s); cache disabled", self._safe_url(), e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected: %s", self._safe_url())

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def _safe_url(self) -> str:
        """Redis URL without credentials, for logging."""
        url = self.settings.redis_url
        if "@" in url:
            scheme, _, rest = url.partition("://")
            return f"{scheme}://***@{rest.split('@', 1)[1]}"
        return url

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. True if connected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing a broken Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def _call(
        self,
        op: str,
        target: str,
        command: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run command against Redis with one reconnect-and-retry on a dropped link.

        Returns fallback when the cache is off or the command fails.
        """
        if not self.is_available() or self.redis is None:
            return fallback
        try:
            return await command(self.redis)
        except _CONNECTION_ERRORS:
            if await self._reconnect() and self.redis is not None:
                try:
                    return await command(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s retry failed for %s", op, target)
                    return fallback
            logger.warning("Cache %s skipped for %s (Redis disconnected)", op, target)
            return fallback
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op, target)
            return fallback

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value for key, or None on miss or failure."""
        raw = await self._call("get", key, lambda r: r.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Cache payload for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value under key for ttl seconds in a single SETEX.

        Args:
            key: Cache key.
            value: JSON-serializable payload.
            ttl: Time-to-live in seconds.

        Returns:
            True if stored, False otherwise.
        """
        if not self.is_available():
            return False
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache value for key %s is not JSON-serializable", key)
            return False

        async def setex(r: redis.Redis) -> bool:
            await r.setex(key, ttl, serialized)
            return True

        stored = await self._call("set", key, setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return stored

    async def delete(self, *keys: str) -> bool:
        """Remove keys. True if the command ran (absent keys count as removed)."""
        if not keys:
            return True

        async def delete(r: redis.Redis) -> bool:
            await r.delete(*keys)
            return True

        return await self._call("delete", ", ".join(keys), delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching pattern; returns how many were removed.

        SCAN (not KEYS) so the server is never blocked, with matches UNLINKed
        in pipelined chunks.
        """

        async def scan_and_unlink(r: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in r.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _UNLINK_CHUNK_SIZE:
                    deleted += await self._unlink(r, chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(r, chunk)
            return deleted

        deleted = await self._call("delete_pattern", pattern, scan_and_unlink, 0)
        if deleted:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    @staticmethod
    async def _unlink(r: redis.Redis, keys: list[str]) -> int:
        async with r.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(n or 0) for n in results)
