"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache key builders and the application services that
invalidate them.
"""

# Cache key prefixes (used with :id or :<serialized params>)
CACHE_PREFIX_USER = "user"
CACHE_PREFIX_PROPERTY = "property"
CACHE_PREFIX_PROPERTIES = "properties"
CACHE_PREFIX_FAVORITES = "favorites"
CACHE_PREFIX_RECOMMENDATIONS_SENT = "recommendations:sent"
CACHE_PREFIX_RECOMMENDATIONS_RECEIVED = "recommendations:received"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Pagination bounds for list endpoints
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Fields populated when a property is embedded in favorites/recommendations
PROPERTY_SUMMARY_FIELDS = (
    "id",
    "title",
    "description",
    "price",
    "location",
    "propertyType",
    "bedrooms",
    "bathrooms",
    "area",
    "amenities",
    "images",
    "status",
)
