"""Property API: public listing and lookup, owner-only writes."""

from typing import Annotated

from fastapi import APIRouter, Query

from listings.api.v1.dependencies import CurrentUser, PropertyServiceDep
from listings.schemas.common import Envelope, success_response
from listings.schemas.property import PropertyQuery, PropertyWrite

router = APIRouter()


@router.get("", response_model=Envelope)
async def list_properties(
    query: Annotated[PropertyQuery, Query()],
    property_service: PropertyServiceDep,
):
    """Filtered, sorted, paginated properties (cached per distinct query)."""
    return success_response(await property_service.list_properties(query.to_filters()))


@router.get("/{property_id}", response_model=Envelope)
async def get_property(property_id: str, property_service: PropertyServiceDep):
    prop = await property_service.get_property(property_id)
    return success_response({"property": prop})


@router.post("", response_model=Envelope, status_code=201)
async def create_property(
    body: PropertyWrite,
    current_user: CurrentUser,
    property_service: PropertyServiceDep,
):
    prop = await property_service.create_property(current_user.id, body.to_data())
    return success_response({"property": prop})


@router.put("/{property_id}", response_model=Envelope)
async def update_property(
    property_id: str,
    body: PropertyWrite,
    current_user: CurrentUser,
    property_service: PropertyServiceDep,
):
    """Replace a property. Only its creator may update it."""
    prop = await property_service.update_property(
        current_user.id, property_id, body.to_data()
    )
    return success_response({"property": prop})


@router.delete("/{property_id}", response_model=Envelope)
async def delete_property(
    property_id: str,
    current_user: CurrentUser,
    property_service: PropertyServiceDep,
):
    """Delete a property. Only its creator may delete it."""
    await property_service.delete_property(current_user.id, property_id)
    return success_response(None)
