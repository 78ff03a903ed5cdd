"""Favorite ORM model: a (user, property) pair."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listings.infrastructure.persistence.database import Base
from listings.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin
from listings.infrastructure.persistence.models.property import Property


class Favorite(CuidMixin, CreatedAtMixin, Base):
    """Favorite. Table: favorite. Unique (user_id, property_id) is the authoritative duplicate guard."""

    __tablename__ = "favorite"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    property_id: Mapped[str] = mapped_column(
        String, ForeignKey("property.id", ondelete="CASCADE"), nullable=False, index=True
    )

    property: Mapped[Property] = relationship(lazy="raise")

    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_favorite_user_property"),
        Index("ix_favorite_user_created", "user_id", "created_at"),
    )
