"""Recommendation application service: send, list, accept/reject."""

from __future__ import annotations

import logging
from typing import Any

from listings.domain.enums import RecommendationStatus
from listings.domain.exceptions import (
    DuplicateResourceException,
    InvalidStateTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from listings.infrastructure.cache import (
    CacheAside,
    recommendations_received_key,
    recommendations_sent_key,
)
from listings.infrastructure.persistence.repositories import (
    PropertyRepository,
    RecommendationRepository,
    UserRepository,
)
from listings.infrastructure.persistence.serializers import recommendation_to_dict

logger = logging.getLogger(__name__)


class RecommendationService:
    """Peer-to-peer property recommendations.

    Lists are cached per participant (recommendations:sent:<id>,
    recommendations:received:<id>); every write invalidates both sides.
    """

    def __init__(
        self,
        recommendation_repo: RecommendationRepository,
        user_repo: UserRepository,
        property_repo: PropertyRepository,
        cache: CacheAside,
        *,
        ttl: int = 300,
    ) -> None:
        self._recommendations = recommendation_repo
        self._users = user_repo
        self._properties = property_repo
        self._cache = cache
        self._ttl = ttl

    async def recommend(
        self,
        sender_id: str,
        recipient_email: str,
        property_id: str,
        message: str | None = None,
    ) -> dict[str, Any]:
        """Send a pending recommendation of property_id to the user with recipient_email."""
        recipient = await self._users.get_by_email(recipient_email)
        if recipient is None:
            raise ResourceNotFoundException("user", message="Recipient user not found")
        if not await self._properties.exists(property_id):
            raise ResourceNotFoundException("property", property_id)
        if await self._recommendations.exists(sender_id, recipient.id, property_id):
            raise DuplicateResourceException("Recommendation already sent", "recommendation")
        rec = await self._recommendations.create_recommendation(
            sender_id, recipient.id, property_id, message
        )
        logger.info(
            "Recommendation %s: %s -> %s (property %s)",
            rec.id,
            sender_id,
            recipient.id,
            property_id,
        )
        await self._invalidate(sender_id, recipient.id)
        return recommendation_to_dict(rec)

    async def list_received(self, user_id: str) -> dict[str, Any]:
        async def load() -> dict[str, Any]:
            rows = await self._recommendations.list_received(user_id)
            return {
                "recommendations": [
                    recommendation_to_dict(r, with_sender=True, with_property=True)
                    for r in rows
                ]
            }

        return await self._cache.get_or_compute(
            recommendations_received_key(user_id), load, self._ttl
        )

    async def list_sent(self, user_id: str) -> dict[str, Any]:
        async def load() -> dict[str, Any]:
            rows = await self._recommendations.list_sent(user_id)
            return {
                "recommendations": [
                    recommendation_to_dict(r, with_recipient=True, with_property=True)
                    for r in rows
                ]
            }

        return await self._cache.get_or_compute(
            recommendations_sent_key(user_id), load, self._ttl
        )

    async def update_status(
        self, user_id: str, recommendation_id: str, status: str
    ) -> dict[str, Any]:
        """Accept or reject a recommendation addressed to user_id.

        Only a pending recommendation can change, and only once: the store
        update is conditional on status still being pending.
        """
        try:
            target = RecommendationStatus(status)
        except ValueError:
            target = None
        if target is None or target not in RecommendationStatus.terminal():
            raise ValidationException("Invalid status", field="status")

        rec = await self._recommendations.get_for_recipient(recommendation_id, user_id)
        if rec is None:
            raise ResourceNotFoundException("recommendation", recommendation_id)
        current = RecommendationStatus(rec.status)
        if not current.can_transition_to(target):
            raise InvalidStateTransitionException(
                "Recommendation already processed", current.value, target.value
            )
        if not await self._recommendations.transition_from_pending(
            recommendation_id, user_id, target
        ):
            # Lost a race with a concurrent transition.
            raise InvalidStateTransitionException(
                "Recommendation already processed", current.value, target.value
            )
        await self._invalidate(rec.sender_id, user_id)
        updated = await self._recommendations.get_for_recipient(recommendation_id, user_id)
        assert updated is not None
        return recommendation_to_dict(updated)

    async def _invalidate(self, sender_id: str, recipient_id: str) -> None:
        await self._cache.invalidate(
            recommendations_sent_key(sender_id),
            recommendations_received_key(recipient_id),
        )
