"""Recommendations API: send, list received/sent, accept or reject."""

from fastapi import APIRouter

from listings.api.v1.dependencies import CurrentUser, RecommendationServiceDep
from listings.schemas.common import Envelope, success_response
from listings.schemas.recommendation import (
    RecommendationCreate,
    RecommendationStatusUpdate,
)

router = APIRouter()


@router.post("", response_model=Envelope, status_code=201)
async def create_recommendation(
    body: RecommendationCreate,
    current_user: CurrentUser,
    recommendation_service: RecommendationServiceDep,
):
    """Recommend a property to another user by email."""
    rec = await recommendation_service.recommend(
        current_user.id, body.recipient_email, body.property_id, body.message
    )
    return success_response({"recommendation": rec})


@router.get("/received", response_model=Envelope)
async def list_received(
    current_user: CurrentUser, recommendation_service: RecommendationServiceDep
):
    return success_response(await recommendation_service.list_received(current_user.id))


@router.get("/sent", response_model=Envelope)
async def list_sent(
    current_user: CurrentUser, recommendation_service: RecommendationServiceDep
):
    return success_response(await recommendation_service.list_sent(current_user.id))


@router.patch("/{recommendation_id}/status", response_model=Envelope)
async def update_status(
    recommendation_id: str,
    body: RecommendationStatusUpdate,
    current_user: CurrentUser,
    recommendation_service: RecommendationServiceDep,
):
    """Accept or reject a pending recommendation addressed to the current user."""
    rec = await recommendation_service.update_status(
        current_user.id, recommendation_id, body.status
    )
    return success_response({"recommendation": rec})
