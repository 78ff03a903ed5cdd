"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from listings.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from listings.api.v1.endpoints import auth, favorites, health, properties, recommendations

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(properties.router, prefix="/properties", tags=["properties"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(
    recommendations.router, prefix="/recommendations", tags=["recommendations"]
)
