"""Application services: auth, properties, favorites, recommendations."""

from listings.application.services.auth_service import AuthService
from listings.application.services.favorite_service import FavoriteService
from listings.application.services.property_service import PropertyService
from listings.application.services.recommendation_service import (
    RecommendationService,
)

__all__ = [
    "AuthService",
    "FavoriteService",
    "PropertyService",
    "RecommendationService",
]
