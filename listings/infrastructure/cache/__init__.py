"""Cache: Redis service, cache-aside accessor and cache key utilities.

Used by application services for read-through / write-invalidate caching.
CacheService uses listings.core.config; key format is in keys.py (DRY).
"""

from listings.infrastructure.cache.cache_aside import CacheAside
from listings.infrastructure.cache.cache_protocol import CacheProtocol
from listings.infrastructure.cache.keys import (
    favorites_key,
    list_key,
    namespace_pattern,
    properties_list_key,
    property_key,
    recommendations_received_key,
    recommendations_sent_key,
    serialize_params,
    user_key,
)
from listings.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheAside",
    "CacheProtocol",
    "CacheService",
    "favorites_key",
    "list_key",
    "namespace_pattern",
    "properties_list_key",
    "property_key",
    "recommendations_received_key",
    "recommendations_sent_key",
    "serialize_params",
    "user_key",
]
