"""Property API schemas: request body and list query (camelCase on the wire)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from listings.application.dtos.property import PropertyData, PropertyFilters
from listings.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from listings.domain.enums import PropertyStatus, PropertyType, SortField, SortOrder


def _strip(v: object) -> object:
    return v.strip() if isinstance(v, str) else v


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Location(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1, alias="zipCode")
    coordinates: Coordinates | None = None

    @field_validator("address", "city", "state", "zip_code", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)


class PropertyWrite(BaseModel):
    """Request body for POST /properties and PUT /properties/{id} (full replacement)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=3)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    location: Location
    property_type: PropertyType = Field(..., alias="propertyType")
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    area: float = Field(..., ge=0)
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    status: PropertyStatus | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    @field_validator("amenities", "images")
    @classmethod
    def strip_items(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item.strip()]

    def to_data(self) -> PropertyData:
        coords = self.location.coordinates
        return PropertyData(
            title=self.title,
            description=self.description,
            price=self.price,
            address=self.location.address,
            city=self.location.city,
            state=self.location.state,
            zip_code=self.location.zip_code,
            latitude=coords.lat if coords else None,
            longitude=coords.lng if coords else None,
            property_type=self.property_type.value,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            area=self.area,
            amenities=tuple(self.amenities),
            images=tuple(self.images),
            status=self.status.value if self.status else None,
        )


class PropertyQuery(BaseModel):
    """Query parameters for GET /properties.

    Unknown parameters are ignored. amenities accepts repeated parameters
    (?amenities=pool&amenities=gym) or a comma-separated value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    min_price: float | None = Field(None, ge=0, alias="minPrice")
    max_price: float | None = Field(None, ge=0, alias="maxPrice")
    property_type: PropertyType | None = Field(None, alias="propertyType")
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: float | None = Field(None, ge=0)
    min_area: float | None = Field(None, ge=0, alias="minArea")
    max_area: float | None = Field(None, ge=0, alias="maxArea")
    city: str | None = None
    state: str | None = None
    amenities: list[str] = Field(default_factory=list)
    status: PropertyStatus | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    sort: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @field_validator("city", "state", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        v = _strip(v)
        return v or None

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, v: object) -> object:
        if v is None:
            return []
        items = [v] if isinstance(v, str) else v
        if not isinstance(items, list | tuple):
            return v
        return [
            part.strip()
            for item in items
            for part in str(item).split(",")
            if part.strip()
        ]

    def to_filters(self) -> PropertyFilters:
        return PropertyFilters(
            min_price=self.min_price,
            max_price=self.max_price,
            property_type=self.property_type.value if self.property_type else None,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            min_area=self.min_area,
            max_area=self.max_area,
            city=self.city,
            state=self.state,
            amenities=tuple(sorted(set(self.amenities))),
            status=self.status.value if self.status else None,
            page=self.page,
            limit=self.limit,
            sort=self.sort,
            order=self.order,
        )

    def cache_params(self) -> dict[str, Any]:
        """Canonical parameter bag for the list cache key."""
        return self.to_filters().cache_params()
