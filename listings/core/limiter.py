"""Rate limiter for SlowAPI.

One global limit per client address (rate_limit_max per
rate_limit_window_minutes), applied by SlowAPIMiddleware before routing.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from listings.core.config import Settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def create_limiter(settings: Settings) -> Limiter:
    """Build the app limiter from settings (disabled when rate_limit_enabled is False)."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
        headers_enabled=False,
    )
