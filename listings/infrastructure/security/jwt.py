"""JWT access tokens for authentication.

Tokens carry the user id as ``sub`` and an ``exp`` claim; secret, algorithm
and default lifetime come from listings.core.config.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from listings.core.config import get_settings


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed JWT whose subject is user_id.

    Args:
        user_id: Id of the authenticated user (becomes ``sub``).
        expires_delta: Optional lifetime; else settings.access_token_expire_minutes.
        extra_claims: Optional additional claims.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    lifetime = (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: dict[str, Any] = dict(extra_claims or {})
    to_encode["sub"] = user_id
    to_encode["exp"] = datetime.now(UTC) + lifetime
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_access_token(token: str) -> str:
    """Verify token and return its subject (user id).

    Raises:
        ValueError: If the token is malformed, badly signed, expired, or
            has no usable ``sub``.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise ValueError("Token missing required claim: sub")
    return subject
