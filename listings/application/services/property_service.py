"""Property application service: cached reads, owner-only writes, write-then-invalidate."""

from __future__ import annotations

import logging
import math
from typing import Any

from listings.application.dtos.property import PropertyData, PropertyFilters
from listings.core.constants import CACHE_PREFIX_PROPERTIES
from listings.domain.exceptions import AuthorizationException, ResourceNotFoundException
from listings.infrastructure.cache import (
    CacheAside,
    favorites_key,
    properties_list_key,
    property_key,
    recommendations_received_key,
    recommendations_sent_key,
)
from listings.infrastructure.persistence.models import Property
from listings.infrastructure.persistence.repositories import PropertyRepository
from listings.infrastructure.persistence.serializers import property_to_dict

logger = logging.getLogger(__name__)


class PropertyService:
    """List, get, create, update and delete properties.

    Every write commits before any cache key is deleted. Writes drop the whole
    properties list namespace since any list may contain the changed row.
    """

    def __init__(
        self,
        property_repo: PropertyRepository,
        cache: CacheAside,
        *,
        entity_ttl: int = 300,
        list_ttl: int = 300,
    ) -> None:
        self._repo = property_repo
        self._cache = cache
        self._entity_ttl = entity_ttl
        self._list_ttl = list_ttl

    async def list_properties(self, filters: PropertyFilters) -> dict[str, Any]:
        """One page of properties matching filters, with pagination metadata."""

        async def load() -> dict[str, Any]:
            rows, total = await self._repo.search(filters)
            return {
                "properties": [property_to_dict(p) for p in rows],
                "pagination": {
                    "total": total,
                    "page": filters.page,
                    "limit": filters.limit,
                    "pages": math.ceil(total / filters.limit),
                },
            }

        key = properties_list_key(filters.cache_params())
        return await self._cache.get_or_compute(key, load, self._list_ttl)

    async def get_property(self, property_id: str) -> dict[str, Any]:
        """Single property. Raises ResourceNotFoundException; misses are never cached."""
        try:
            key = property_key(property_id)
        except ValueError:
            raise ResourceNotFoundException("property", property_id) from None

        async def load() -> dict[str, Any]:
            prop = await self._repo.get_by_id(property_id)
            if prop is None:
                raise ResourceNotFoundException("property", property_id)
            return property_to_dict(prop)

        return await self._cache.get_or_compute(key, load, self._entity_ttl)

    async def create_property(self, owner_id: str, data: PropertyData) -> dict[str, Any]:
        prop = await self._repo.create_property(owner_id, data)
        logger.info("Property %s created by %s", prop.id, owner_id)
        await self._cache.invalidate_namespace(CACHE_PREFIX_PROPERTIES)
        return property_to_dict(prop)

    async def update_property(
        self, user_id: str, property_id: str, data: PropertyData
    ) -> dict[str, Any]:
        """Replace a property's fields. Only its creator may do this."""
        prop = await self._get_owned(user_id, property_id, "update")
        dependents = await self._dependent_keys(property_id)
        updated = await self._repo.replace_property(prop, data)
        logger.info("Property %s updated by %s", property_id, user_id)
        await self._invalidate(property_id, dependents)
        return property_to_dict(updated)

    async def delete_property(self, user_id: str, property_id: str) -> None:
        """Delete a property (its favorites and recommendations go with it)."""
        prop = await self._get_owned(user_id, property_id, "delete")
        dependents = await self._dependent_keys(property_id)
        await self._repo.delete(prop)
        logger.info("Property %s deleted by %s", property_id, user_id)
        await self._invalidate(property_id, dependents)

    async def _get_owned(self, user_id: str, property_id: str, action: str) -> Property:
        prop = await self._repo.get_by_id(property_id)
        if prop is None:
            raise ResourceNotFoundException("property", property_id)
        if prop.created_by != user_id:
            raise AuthorizationException(resource="property", action=action)
        return prop

    async def _dependent_keys(self, property_id: str) -> list[str]:
        """Per-user cache keys whose payload embeds this property.

        Collected before the write: after a delete the cascade has removed
        the rows that name these users.
        """
        keys = {favorites_key(u) for u in await self._repo.favorited_by(property_id)}
        for sender_id, recipient_id in await self._repo.recommendation_participants(
            property_id
        ):
            keys.add(recommendations_sent_key(sender_id))
            keys.add(recommendations_received_key(recipient_id))
        return sorted(keys)

    async def _invalidate(self, property_id: str, dependents: list[str]) -> None:
        await self._cache.invalidate(property_key(property_id), *dependents)
        await self._cache.invalidate_namespace(CACHE_PREFIX_PROPERTIES)
