"""Auth application service: register, login, and the cached user projection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from listings.application.dtos.user import AuthResult, UserResult
from listings.domain.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ResourceNotFoundException,
)
from listings.infrastructure.cache import CacheAside, user_key
from listings.infrastructure.persistence.repositories import UserRepository
from listings.infrastructure.persistence.serializers import user_to_dict
from listings.infrastructure.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both login failures cost one bcrypt check.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(hash_password, "not-a-real-password")
    return _dummy_hash_cache


class AuthService:
    """Register and authenticate users; resolve the public projection through the cache."""

    def __init__(
        self,
        user_repo: UserRepository,
        cache: CacheAside,
        *,
        user_ttl: int = 3600,
    ) -> None:
        self._user_repo = user_repo
        self._cache = cache
        self._user_ttl = user_ttl

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create a user and issue a token. Raises DuplicateResourceException if the email is taken."""
        if await self._user_repo.get_by_email(email):
            raise DuplicateResourceException("Email already registered", "user")
        hashed = await asyncio.to_thread(hash_password, password)
        user = await self._user_repo.create_user(email, name, hashed)
        logger.info("Registered user %s", user.id)
        return await self._issue(user_to_dict(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email/password.

        Unknown email and wrong password raise the same AuthenticationException
        after the same amount of hashing work.
        """
        user = await self._user_repo.get_by_email(email)
        if user is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            raise AuthenticationException("Invalid credentials")
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            raise AuthenticationException("Invalid credentials")
        return await self._issue(user_to_dict(user))

    async def get_user(self, user_id: str) -> UserResult | None:
        """Public projection for user_id (cache-aside on user:<id>), or None if no such user."""
        try:
            key = user_key(user_id)
        except ValueError:
            return None

        async def load() -> dict[str, Any] | None:
            user = await self._user_repo.get_by_id(user_id)
            return user_to_dict(user) if user else None

        data = await self._cache.get_or_compute(key, load, self._user_ttl)
        return UserResult.from_dict(data) if data else None

    async def me(self, user_id: str) -> UserResult:
        user = await self.get_user(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def _issue(self, projection: dict[str, Any]) -> AuthResult:
        await self._cache.write(user_key(projection["id"]), projection, self._user_ttl)
        return AuthResult(
            user=UserResult.from_dict(projection),
            token=create_access_token(projection["id"]),
        )
