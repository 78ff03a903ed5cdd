"""Cache key builders. Single place for key format (DRY).

Entity-scoped keys are ``prefix:id``. List keys are ``prefix:<json>`` where
the JSON is the parameter bag with keys sorted, so the same bag always maps
to the same key regardless of insertion order.

Key components (user_id, property_id) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys.
"""

import json
from collections.abc import Mapping
from typing import Any

from listings.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_FAVORITES,
    CACHE_PREFIX_PROPERTIES,
    CACHE_PREFIX_PROPERTY,
    CACHE_PREFIX_RECOMMENDATIONS_RECEIVED,
    CACHE_PREFIX_RECOMMENDATIONS_SENT,
    CACHE_PREFIX_USER,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def serialize_params(params: Mapping[str, Any]) -> str:
    """Deterministic JSON for a parameter bag.

    None values are dropped (an absent filter and an explicit null filter are
    the same query). Keys are sorted; separators are compact.
    """
    normalized = {k: params[k] for k in sorted(params) if params[k] is not None}
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"), default=str)


def list_key(prefix: str, params: Mapping[str, Any]) -> str:
    """Cache key for a parameterized list: ``prefix:<sorted json>``."""
    return f"{prefix}{CACHE_KEY_SEP}{serialize_params(params)}"


def namespace_pattern(prefix: str) -> str:
    """Glob pattern matching every key under prefix (for bulk invalidation)."""
    return f"{prefix}{CACHE_KEY_SEP}*"


def user_key(user_id: str) -> str:
    """Cache key for the public user projection."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_USER}{CACHE_KEY_SEP}{user_id}"


def property_key(property_id: str) -> str:
    """Cache key for a single property."""
    _validate_key_component(property_id, "property_id")
    return f"{CACHE_PREFIX_PROPERTY}{CACHE_KEY_SEP}{property_id}"


def properties_list_key(params: Mapping[str, Any]) -> str:
    """Cache key for a filtered, paginated property list."""
    return list_key(CACHE_PREFIX_PROPERTIES, params)


def favorites_key(user_id: str) -> str:
    """Cache key for a user's favorites list."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_FAVORITES}{CACHE_KEY_SEP}{user_id}"


def recommendations_sent_key(user_id: str) -> str:
    """Cache key for recommendations sent by a user."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_RECOMMENDATIONS_SENT}{CACHE_KEY_SEP}{user_id}"


def recommendations_received_key(user_id: str) -> str:
    """Cache key for recommendations received by a user."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_RECOMMENDATIONS_RECEIVED}{CACHE_KEY_SEP}{user_id}"
