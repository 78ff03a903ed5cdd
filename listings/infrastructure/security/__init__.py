"""Security: JWT access tokens and password hashing."""

from listings.infrastructure.security.jwt import create_access_token, decode_access_token
from listings.infrastructure.security.password import hash_password, verify_password

__all__ = [
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
