"""Pydantic request/response schemas for the API."""

from listings.schemas.auth import LoginRequest, RegisterRequest
from listings.schemas.common import Envelope, error_response, success_response
from listings.schemas.health import HealthResponse
from listings.schemas.property import PropertyQuery, PropertyWrite
from listings.schemas.recommendation import (
    RecommendationCreate,
    RecommendationStatusUpdate,
)

__all__ = [
    "Envelope",
    "HealthResponse",
    "LoginRequest",
    "PropertyQuery",
    "PropertyWrite",
    "RecommendationCreate",
    "RecommendationStatusUpdate",
    "RegisterRequest",
    "error_response",
    "success_response",
]
