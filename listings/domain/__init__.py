"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from listings.domain.enums import (
    PropertyStatus,
    PropertyType,
    RecommendationStatus,
    SortField,
    SortOrder,
)
from listings.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    InvalidStateTransitionException,
    ListingException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Enums
    "PropertyStatus",
    "PropertyType",
    "RecommendationStatus",
    "SortField",
    "SortOrder",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "DuplicateResourceException",
    "InvalidStateTransitionException",
    "ListingException",
    "ResourceNotFoundException",
    "ValidationException",
]
