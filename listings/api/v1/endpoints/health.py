"""Health check endpoint. No auth, no store access; used for liveness checks."""

from fastapi import APIRouter

from listings.api.v1.dependencies import Cache
from listings.core.config import get_settings
from listings.schemas.common import Envelope, success_response
from listings.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=Envelope)
def health_check(cache: Cache):
    """Return ok plus whether the cache is reachable (the service works without it)."""
    payload = HealthResponse(
        version=get_settings().app_version,
        cache="available" if cache.available else "unavailable",
    )
    return success_response(payload.model_dump())
