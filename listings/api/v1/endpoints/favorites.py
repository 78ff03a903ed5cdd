"""Favorites API (authenticated user's favorites)."""

from fastapi import APIRouter

from listings.api.v1.dependencies import CurrentUser, FavoriteServiceDep
from listings.schemas.common import Envelope, success_response

router = APIRouter()


@router.get("", response_model=Envelope)
async def list_favorites(current_user: CurrentUser, favorite_service: FavoriteServiceDep):
    return success_response(await favorite_service.list_favorites(current_user.id))


@router.post("/{property_id}", response_model=Envelope, status_code=201)
async def add_favorite(
    property_id: str,
    current_user: CurrentUser,
    favorite_service: FavoriteServiceDep,
):
    favorite = await favorite_service.add_favorite(current_user.id, property_id)
    return success_response({"favorite": favorite})


@router.delete("/{property_id}", response_model=Envelope)
async def remove_favorite(
    property_id: str,
    current_user: CurrentUser,
    favorite_service: FavoriteServiceDep,
):
    await favorite_service.remove_favorite(current_user.id, property_id)
    return success_response(None)
