"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated.

Both functions are CPU-bound; async callers run them in asyncio.to_thread.
"""

import base64
import hashlib

import bcrypt

from listings.core.config import get_settings


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return the bcrypt hash of password (cost from settings.bcrypt_rounds)."""
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=cost))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password; False on any mismatch."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False
