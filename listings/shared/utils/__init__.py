"""Shared utilities: datetime, generators."""

from listings.shared.utils.datetime import ensure_utc, isoformat_utc, utc_now
from listings.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "isoformat_utc",
]
