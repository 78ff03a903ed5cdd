"""Application DTOs (no ORM dependency)."""

from listings.application.dtos.property import PropertyData, PropertyFilters
from listings.application.dtos.user import AuthResult, UserResult

__all__ = [
    "AuthResult",
    "PropertyData",
    "PropertyFilters",
    "UserResult",
]
