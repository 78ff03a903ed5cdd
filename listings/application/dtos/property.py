"""DTOs for property use cases (no dependency on ORM or HTTP)."""

from dataclasses import dataclass, field
from typing import Any

from listings.core.constants import DEFAULT_PAGE_SIZE
from listings.domain.enums import SortField, SortOrder


@dataclass(frozen=True)
class PropertyFilters:
    """Parsed property-list query: filters, sort and pagination.

    Only these fields take part in the list cache key, so unknown query
    parameters cannot create new keys.
    """

    min_price: float | None = None
    max_price: float | None = None
    property_type: str | None = None
    bedrooms: int | None = None
    bathrooms: float | None = None
    min_area: float | None = None
    max_area: float | None = None
    city: str | None = None
    state: str | None = None
    amenities: tuple[str, ...] = field(default_factory=tuple)
    status: str | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def cache_params(self) -> dict[str, Any]:
        """Parameter bag for the list cache key (wire names, canonical values)."""
        return {
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "propertyType": self.property_type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "minArea": self.min_area,
            "maxArea": self.max_area,
            "city": self.city,
            "state": self.state,
            "amenities": sorted(set(self.amenities)) or None,
            "status": self.status,
            "page": self.page,
            "limit": self.limit,
            "sort": self.sort.value,
            "order": self.order.value,
        }


@dataclass(frozen=True)
class PropertyData:
    """Writable property fields (create and full update)."""

    title: str
    description: str
    price: float
    address: str
    city: str
    state: str
    zip_code: str
    property_type: str
    bedrooms: int
    bathrooms: float
    area: float
    latitude: float | None = None
    longitude: float | None = None
    amenities: tuple[str, ...] = ()
    images: tuple[str, ...] = ()
    status: str | None = None
