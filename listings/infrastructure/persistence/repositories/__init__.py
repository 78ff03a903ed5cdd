"""Persistence repositories. Re-exports for dependency injection."""

from listings.infrastructure.persistence.repositories.base import BaseRepository
from listings.infrastructure.persistence.repositories.favorite_repo import (
    FavoriteRepository,
)
from listings.infrastructure.persistence.repositories.property_repo import (
    PropertyRepository,
)
from listings.infrastructure.persistence.repositories.recommendation_repo import (
    RecommendationRepository,
)
from listings.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "FavoriteRepository",
    "PropertyRepository",
    "RecommendationRepository",
    "UserRepository",
]
