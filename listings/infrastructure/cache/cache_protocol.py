"""Cache protocol for the cache-aside accessor (DIP).

CacheService (Redis) implements it in production; tests inject an in-memory
double. Implementations must never raise on backend failure.
"""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis)."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value atomically with TTL in seconds. Returns True on success."""
        ...

    async def delete(self, *keys: str) -> bool:
        """Remove keys from cache. Returns True on success."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove every key matching a glob pattern. Returns number deleted."""
        ...
