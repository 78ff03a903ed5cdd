"""UTC datetime utilities.

All persisted timestamps are timezone-aware UTC. SQLite hands back naive
datetimes, so serializers pass values through ensure_utc before isoformat().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as a UTC-aware datetime (naive values are assumed UTC)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def isoformat_utc(dt: datetime | None) -> str | None:
    """ISO-8601 string for a stored timestamp, or None."""
    value = ensure_utc(dt)
    return value.isoformat() if value is not None else None
