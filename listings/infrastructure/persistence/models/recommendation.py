"""Recommendation ORM model: a (sender, recipient, property) triple with status."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listings.domain.enums import RecommendationStatus
from listings.infrastructure.persistence.database import Base
from listings.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from listings.infrastructure.persistence.models.property import Property, _in_check
from listings.infrastructure.persistence.models.user import User


class Recommendation(CuidMixin, TimestampMixin, Base):
    """Recommendation. Table: recommendation. Unique (sender_id, recipient_id, property_id)."""

    __tablename__ = "recommendation"

    sender_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    recipient_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    property_id: Mapped[str] = mapped_column(
        String, ForeignKey("property.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RecommendationStatus.PENDING.value, index=True
    )

    sender: Mapped[User] = relationship(foreign_keys=[sender_id], lazy="raise")
    recipient: Mapped[User] = relationship(foreign_keys=[recipient_id], lazy="raise")
    property: Mapped[Property] = relationship(lazy="raise")

    __table_args__ = (
        UniqueConstraint(
            "sender_id", "recipient_id", "property_id", name="uq_recommendation_triple"
        ),
        CheckConstraint(
            _in_check("status", RecommendationStatus.values()),
            name="recommendation_status_check",
        ),
        Index("ix_recommendation_sender_created", "sender_id", "created_at"),
        Index("ix_recommendation_recipient_created", "recipient_id", "created_at"),
    )
