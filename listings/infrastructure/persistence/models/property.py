"""Property and PropertyAmenity ORM models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listings.domain.enums import PropertyStatus, PropertyType
from listings.infrastructure.persistence.database import Base
from listings.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from listings.infrastructure.persistence.models.user import User


def _in_check(column: str, values: Iterable[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class PropertyAmenity(Base):
    """One amenity of a property. Table: property_amenity. Unique (property_id, name).

    Stored as rows (not a JSON array) so the amenity superset filter is a
    portable GROUP BY / HAVING query.
    """

    __tablename__ = "property_amenity"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[str] = mapped_column(
        String, ForeignKey("property.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("property_id", "name", name="uq_property_amenity"),
        Index("ix_property_amenity_name", "name"),
    )


class Property(CuidMixin, TimestampMixin, Base):
    """Property listing. Table: property. Mutable only by its creator (created_by)."""

    __tablename__ = "property"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False, index=True)

    address: Mapped[str] = mapped_column(String, nullable=False)
    city: Mapped[str] = mapped_column(String, nullable=False)
    state: Mapped[str] = mapped_column(String, nullable=False)
    zip_code: Mapped[str] = mapped_column(String, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    property_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=PropertyStatus.AVAILABLE.value, index=True
    )

    created_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )

    owner: Mapped[User] = relationship(lazy="joined", innerjoin=True)

    amenity_links: Mapped[list[PropertyAmenity]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=PropertyAmenity.position,
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(_in_check("property_type", PropertyType.values()), name="property_type_check"),
        CheckConstraint(_in_check("status", PropertyStatus.values()), name="property_status_check"),
        CheckConstraint("price >= 0", name="property_price_check"),
        CheckConstraint("bedrooms >= 0 AND bathrooms >= 0 AND area >= 0", name="property_size_check"),
        Index("ix_property_city_state", "city", "state"),
    )

    @property
    def amenities(self) -> list[str]:
        """Amenity names in the order they were supplied."""
        return [link.name for link in self.amenity_links]

    @amenities.setter
    def amenities(self, names: Iterable[str]) -> None:
        # Reuse existing rows so a flush never inserts a (property_id, name)
        # pair before deleting the orphan that holds it.
        existing = {link.name: link for link in self.amenity_links}
        links: list[PropertyAmenity] = []
        for position, name in enumerate(dict.fromkeys(names)):
            link = existing.get(name) or PropertyAmenity(name=name)
            link.position = position
            links.append(link)
        self.amenity_links = links
