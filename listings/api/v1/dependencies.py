"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the cache-aside accessor,
application services and the authenticated user. Routes depend only on
these dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from listings.application.dtos.user import UserResult
from listings.application.services import (
    AuthService,
    FavoriteService,
    PropertyService,
    RecommendationService,
)
from listings.core.config import get_settings
from listings.domain.exceptions import AuthenticationException
from listings.infrastructure.cache import CacheAside
from listings.infrastructure.persistence.database import get_db
from listings.infrastructure.persistence.repositories import (
    FavoriteRepository,
    PropertyRepository,
    RecommendationRepository,
    UserRepository,
)
from listings.infrastructure.security import decode_access_token

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_cache_aside(request: Request) -> CacheAside:
    """Cache-aside accessor over app.state.cache (None when Redis is disabled)."""
    return CacheAside(getattr(request.app.state, "cache", None))


Cache = Annotated[CacheAside, Depends(get_cache_aside)]


def get_auth_service(db: DbSession, cache: Cache) -> AuthService:
    return AuthService(
        UserRepository(db), cache, user_ttl=get_settings().cache_ttl_users
    )


def get_property_service(db: DbSession, cache: Cache) -> PropertyService:
    settings = get_settings()
    return PropertyService(
        PropertyRepository(db),
        cache,
        entity_ttl=settings.cache_ttl_entities,
        list_ttl=settings.cache_ttl_lists,
    )


def get_favorite_service(db: DbSession, cache: Cache) -> FavoriteService:
    return FavoriteService(
        FavoriteRepository(db),
        PropertyRepository(db),
        cache,
        ttl=get_settings().cache_ttl_lists,
    )


def get_recommendation_service(db: DbSession, cache: Cache) -> RecommendationService:
    return RecommendationService(
        RecommendationRepository(db),
        UserRepository(db),
        PropertyRepository(db),
        cache,
        ttl=get_settings().cache_ttl_lists,
    )


_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResult:
    """Resolve the bearer token to the user's cached projection; raise 401 otherwise."""
    if credentials is None:
        raise AuthenticationException("No token provided")
    try:
        user_id = decode_access_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid token") from None
    user = await auth_service.get_user(user_id)
    if user is None:
        raise AuthenticationException("User not found")
    return user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PropertyServiceDep = Annotated[PropertyService, Depends(get_property_service)]
FavoriteServiceDep = Annotated[FavoriteService, Depends(get_favorite_service)]
RecommendationServiceDep = Annotated[
    RecommendationService, Depends(get_recommendation_service)
]
