"""Map ORM rows to JSON-ready wire payloads (camelCase).

These dicts are what the API returns and what the cache stores, so a cache
hit and a store read produce identical responses.
"""

from __future__ import annotations

from typing import Any

from listings.core.constants import PROPERTY_SUMMARY_FIELDS
from listings.infrastructure.persistence.models import (
    Favorite,
    Property,
    Recommendation,
    User,
)
from listings.shared.utils import isoformat_utc


def user_to_dict(user: User) -> dict[str, Any]:
    """Public projection: never includes the password hash."""
    return {"id": user.id, "email": user.email, "name": user.name}


def _location(prop: Property) -> dict[str, Any]:
    location: dict[str, Any] = {
        "address": prop.address,
        "city": prop.city,
        "state": prop.state,
        "zipCode": prop.zip_code,
    }
    if prop.latitude is not None and prop.longitude is not None:
        location["coordinates"] = {"lat": prop.latitude, "lng": prop.longitude}
    return location


def property_to_dict(prop: Property) -> dict[str, Any]:
    """Full property payload with the owner embedded as createdBy."""
    return {
        "id": prop.id,
        "title": prop.title,
        "description": prop.description,
        "price": prop.price,
        "location": _location(prop),
        "propertyType": prop.property_type,
        "bedrooms": prop.bedrooms,
        "bathrooms": prop.bathrooms,
        "area": prop.area,
        "amenities": prop.amenities,
        "images": list(prop.images or []),
        "status": prop.status,
        "createdBy": user_to_dict(prop.owner),
        "createdAt": isoformat_utc(prop.created_at),
        "updatedAt": isoformat_utc(prop.updated_at),
    }


def property_summary(prop: Property) -> dict[str, Any]:
    """Property fields embedded in favorites and recommendations."""
    full = property_to_dict(prop)
    return {name: full[name] for name in PROPERTY_SUMMARY_FIELDS}


def favorite_to_dict(favorite: Favorite, *, with_property: bool = True) -> dict[str, Any]:
    return {
        "id": favorite.id,
        "user": favorite.user_id,
        "property": (
            property_summary(favorite.property) if with_property else favorite.property_id
        ),
        "createdAt": isoformat_utc(favorite.created_at),
    }


def recommendation_to_dict(
    rec: Recommendation,
    *,
    with_sender: bool = False,
    with_recipient: bool = False,
    with_property: bool = False,
) -> dict[str, Any]:
    """Recommendation payload; related rows are embedded only when loaded by the caller."""
    return {
        "id": rec.id,
        "sender": user_to_dict(rec.sender) if with_sender else rec.sender_id,
        "recipient": user_to_dict(rec.recipient) if with_recipient else rec.recipient_id,
        "property": property_summary(rec.property) if with_property else rec.property_id,
        "message": rec.message,
        "status": rec.status,
        "createdAt": isoformat_utc(rec.created_at),
        "updatedAt": isoformat_utc(rec.updated_at),
    }
