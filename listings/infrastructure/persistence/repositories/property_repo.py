"""Property repository: filtered listing, CRUD, and lookups of users whose cached views embed a property."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from listings.application.dtos.property import PropertyData, PropertyFilters
from listings.domain.enums import PropertyStatus, SortField, SortOrder
from listings.infrastructure.persistence.models import (
    Favorite,
    Property,
    PropertyAmenity,
    Recommendation,
)
from listings.infrastructure.persistence.repositories.base import BaseRepository

_SORT_COLUMNS = {
    SortField.CREATED_AT: Property.created_at,
    SortField.PRICE: Property.price,
    SortField.AREA: Property.area,
    SortField.BEDROOMS: Property.bedrooms,
}


def _conditions(filters: PropertyFilters) -> list[Any]:
    """WHERE clauses for the given filters (all ANDed)."""
    conds: list[Any] = []
    if filters.min_price is not None:
        conds.append(Property.price >= filters.min_price)
    if filters.max_price is not None:
        conds.append(Property.price <= filters.max_price)
    if filters.property_type is not None:
        conds.append(Property.property_type == filters.property_type)
    if filters.bedrooms is not None:
        conds.append(Property.bedrooms == filters.bedrooms)
    if filters.bathrooms is not None:
        conds.append(Property.bathrooms == filters.bathrooms)
    if filters.min_area is not None:
        conds.append(Property.area >= filters.min_area)
    if filters.max_area is not None:
        conds.append(Property.area <= filters.max_area)
    if filters.city:
        conds.append(
            func.lower(Property.city).contains(filters.city.lower(), autoescape=True)
        )
    if filters.state:
        conds.append(
            func.lower(Property.state).contains(filters.state.lower(), autoescape=True)
        )
    if filters.status is not None:
        conds.append(Property.status == filters.status)
    if filters.amenities:
        names = sorted(set(filters.amenities))
        having_all = (
            select(PropertyAmenity.property_id)
            .where(PropertyAmenity.name.in_(names))
            .group_by(PropertyAmenity.property_id)
            .having(func.count(distinct(PropertyAmenity.name)) == len(names))
        )
        conds.append(Property.id.in_(having_all))
    return conds


def _apply_data(prop: Property, data: PropertyData) -> None:
    prop.title = data.title
    prop.description = data.description
    prop.price = data.price
    prop.address = data.address
    prop.city = data.city
    prop.state = data.state
    prop.zip_code = data.zip_code
    prop.latitude = data.latitude
    prop.longitude = data.longitude
    prop.property_type = data.property_type
    prop.bedrooms = data.bedrooms
    prop.bathrooms = data.bathrooms
    prop.area = data.area
    prop.amenities = data.amenities
    prop.images = list(data.images)
    if data.status is not None:
        prop.status = data.status
    elif prop.status is None:
        # New property; an update without status keeps the stored one.
        prop.status = PropertyStatus.AVAILABLE.value


class PropertyRepository(BaseRepository[Property]):
    """Property repository. Ownership checks are the caller's job."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Property)

    async def search(self, filters: PropertyFilters) -> tuple[list[Property], int]:
        """Return one page of matching properties and the total match count."""
        conds = _conditions(filters)
        total = await self.db.scalar(
            select(func.count()).select_from(Property).where(*conds)
        )
        column = _SORT_COLUMNS[filters.sort]
        if filters.order is SortOrder.ASC:
            ordering = (column.asc(), Property.id.asc())
        else:
            ordering = (column.desc(), Property.id.desc())
        stmt: Select[tuple[Property]] = (
            select(Property)
            .where(*conds)
            .order_by(*ordering)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), int(total or 0)

    async def exists(self, property_id: str) -> bool:
        found = await self.db.scalar(select(Property.id).where(Property.id == property_id))
        return found is not None

    async def create_property(self, owner_id: str, data: PropertyData) -> Property:
        """Insert a property owned by owner_id; returns it with owner and amenities loaded."""
        prop = Property(created_by=owner_id)
        _apply_data(prop, data)
        await self.create(prop)
        reloaded = await self.get_by_id(prop.id)
        assert reloaded is not None
        return reloaded

    async def replace_property(self, prop: Property, data: PropertyData) -> Property:
        """Overwrite every writable field of an attached property (full update)."""
        _apply_data(prop, data)
        await self.update(prop)
        reloaded = await self.get_by_id(prop.id)
        assert reloaded is not None
        return reloaded

    async def favorited_by(self, property_id: str) -> list[str]:
        """Ids of users who favorited the property."""
        result = await self.db.execute(
            select(Favorite.user_id).where(Favorite.property_id == property_id)
        )
        return list(result.scalars().all())

    async def recommendation_participants(self, property_id: str) -> list[tuple[str, str]]:
        """(sender_id, recipient_id) of every recommendation of the property."""
        result = await self.db.execute(
            select(Recommendation.sender_id, Recommendation.recipient_id).where(
                Recommendation.property_id == property_id
            )
        )
        return [(sender, recipient) for sender, recipient in result.all()]
