"""ID generators for persisted records."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 primary key.

    CUID2 output is lowercase alphanumeric, so ids are always safe to use as
    cache key components (no ':' separator).
    """
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
