"""Favorite application service."""

from __future__ import annotations

import logging
from typing import Any

from listings.domain.exceptions import DuplicateResourceException, ResourceNotFoundException
from listings.infrastructure.cache import CacheAside, favorites_key
from listings.infrastructure.persistence.repositories import (
    FavoriteRepository,
    PropertyRepository,
)
from listings.infrastructure.persistence.serializers import favorite_to_dict

logger = logging.getLogger(__name__)


class FavoriteService:
    """List, add and remove a user's favorites (cached as favorites:<userId>)."""

    def __init__(
        self,
        favorite_repo: FavoriteRepository,
        property_repo: PropertyRepository,
        cache: CacheAside,
        *,
        ttl: int = 300,
    ) -> None:
        self._favorites = favorite_repo
        self._properties = property_repo
        self._cache = cache
        self._ttl = ttl

    async def list_favorites(self, user_id: str) -> dict[str, Any]:
        async def load() -> dict[str, Any]:
            rows = await self._favorites.list_for_user(user_id)
            return {"favorites": [favorite_to_dict(f) for f in rows]}

        return await self._cache.get_or_compute(favorites_key(user_id), load, self._ttl)

    async def add_favorite(self, user_id: str, property_id: str) -> dict[str, Any]:
        """Favorite a property.

        Raises ResourceNotFoundException if the property does not exist and
        DuplicateResourceException if already favorited (checked up front and
        again by the store's unique constraint).
        """
        if not await self._properties.exists(property_id):
            raise ResourceNotFoundException("property", property_id)
        if await self._favorites.get_pair(user_id, property_id):
            raise DuplicateResourceException("Property already in favorites", "favorite")
        favorite = await self._favorites.add(user_id, property_id)
        logger.debug("User %s favorited property %s", user_id, property_id)
        await self._cache.invalidate(favorites_key(user_id))
        return favorite_to_dict(favorite, with_property=False)

    async def remove_favorite(self, user_id: str, property_id: str) -> None:
        if not await self._favorites.remove(user_id, property_id):
            raise ResourceNotFoundException("favorite", property_id)
        await self._cache.invalidate(favorites_key(user_id))
