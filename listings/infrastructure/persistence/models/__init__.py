"""Persistence models: ORM entities and mixins."""

from listings.infrastructure.persistence.models.favorite import Favorite
from listings.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from listings.infrastructure.persistence.models.property import Property, PropertyAmenity
from listings.infrastructure.persistence.models.recommendation import Recommendation
from listings.infrastructure.persistence.models.user import User

__all__ = [
    "CreatedAtMixin",
    "CuidMixin",
    "Favorite",
    "Property",
    "PropertyAmenity",
    "Recommendation",
    "TimestampMixin",
    "User",
]
