"""Favorite repository: per-user favorites with embedded property."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from listings.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from listings.infrastructure.persistence.models.favorite import Favorite
from listings.infrastructure.persistence.repositories.base import BaseRepository


class FavoriteRepository(BaseRepository[Favorite]):
    """Favorite repository. (user_id, property_id) uniqueness is enforced by the store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Favorite)

    async def get_pair(self, user_id: str, property_id: str) -> Favorite | None:
        result = await self.db.execute(
            select(Favorite).where(
                Favorite.user_id == user_id, Favorite.property_id == property_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: str) -> list[Favorite]:
        """Favorites of user_id, newest first, with the property loaded."""
        result = await self.db.execute(
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .options(selectinload(Favorite.property))
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(result.scalars().all())

    async def add(self, user_id: str, property_id: str) -> Favorite:
        """Insert a favorite. Raises DuplicateResourceException if the pair exists."""
        return await self.create(Favorite(user_id=user_id, property_id=property_id))

    async def remove(self, user_id: str, property_id: str) -> bool:
        """Delete the (user, property) favorite; False if there was none."""
        result = await self.db.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id, Favorite.property_id == property_id
            )
        )
        await self.commit()
        return bool(result.rowcount)

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        if self.is_unique_violation(exc, "uq_favorite_user_property"):
            raise DuplicateResourceException("Property already in favorites", "favorite") from exc
        # The service checks the user first, so a dangling reference is the property.
        if self.is_foreign_key_violation(exc):
            raise ResourceNotFoundException("property") from exc
