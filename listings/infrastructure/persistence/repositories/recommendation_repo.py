"""Recommendation repository: create, per-user lists, and the guarded status transition."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from listings.domain.enums import RecommendationStatus
from listings.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from listings.infrastructure.persistence.models.recommendation import Recommendation
from listings.infrastructure.persistence.repositories.base import BaseRepository
from listings.shared.utils import utc_now


class RecommendationRepository(BaseRepository[Recommendation]):
    """Recommendation repository. (sender, recipient, property) uniqueness is enforced by the store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Recommendation)

    async def exists(self, sender_id: str, recipient_id: str, property_id: str) -> bool:
        found = await self.db.scalar(
            select(Recommendation.id).where(
                Recommendation.sender_id == sender_id,
                Recommendation.recipient_id == recipient_id,
                Recommendation.property_id == property_id,
            )
        )
        return found is not None

    async def create_recommendation(
        self,
        sender_id: str,
        recipient_id: str,
        property_id: str,
        message: str | None = None,
    ) -> Recommendation:
        """Insert a pending recommendation. Raises DuplicateResourceException on a repeated triple."""
        rec = Recommendation(
            sender_id=sender_id,
            recipient_id=recipient_id,
            property_id=property_id,
            message=message,
            status=RecommendationStatus.PENDING.value,
        )
        return await self.create(rec)

    async def list_received(self, recipient_id: str) -> list[Recommendation]:
        """Recommendations sent to recipient_id, newest first, with sender and property loaded."""
        result = await self.db.execute(
            select(Recommendation)
            .where(Recommendation.recipient_id == recipient_id)
            .options(
                selectinload(Recommendation.sender),
                selectinload(Recommendation.property),
            )
            .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
        )
        return list(result.scalars().all())

    async def list_sent(self, sender_id: str) -> list[Recommendation]:
        """Recommendations sent by sender_id, newest first, with recipient and property loaded."""
        result = await self.db.execute(
            select(Recommendation)
            .where(Recommendation.sender_id == sender_id)
            .options(
                selectinload(Recommendation.recipient),
                selectinload(Recommendation.property),
            )
            .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
        )
        return list(result.scalars().all())

    async def get_for_recipient(
        self, recommendation_id: str, recipient_id: str
    ) -> Recommendation | None:
        result = await self.db.execute(
            select(Recommendation).where(
                Recommendation.id == recommendation_id,
                Recommendation.recipient_id == recipient_id,
            ).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def transition_from_pending(
        self,
        recommendation_id: str,
        recipient_id: str,
        target: RecommendationStatus,
    ) -> bool:
        """Set status to target only if it is still pending; commit.

        Single conditional UPDATE, so of two concurrent transitions at most
        one matches a row. Returns True if this call made the change.
        """
        result = await self.db.execute(
            update(Recommendation)
            .where(
                Recommendation.id == recommendation_id,
                Recommendation.recipient_id == recipient_id,
                Recommendation.status == RecommendationStatus.PENDING.value,
            )
            .values(status=target.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self.commit()
        return result.rowcount == 1

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        if self.is_unique_violation(exc, "uq_recommendation_triple"):
            raise DuplicateResourceException("Recommendation already sent", "recommendation") from exc
        # Sender and recipient are looked up first; what is left is the property.
        if self.is_foreign_key_violation(exc):
            raise ResourceNotFoundException("property") from exc
