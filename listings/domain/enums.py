"""Domain enumerations for the listings application.

Enums represent fixed sets of domain values (property type, listing and
recommendation status).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for CHECK constraints)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class PropertyType(_ValuesMixin, str, Enum):
    """Kind of property being listed."""

    APARTMENT = "apartment"
    HOUSE = "house"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    LAND = "land"
    COMMERCIAL = "commercial"


class PropertyStatus(_ValuesMixin, str, Enum):
    """Listing status. New properties start as available."""

    AVAILABLE = "available"
    SOLD = "sold"
    PENDING = "pending"


class RecommendationStatus(_ValuesMixin, str, Enum):
    """Recommendation lifecycle.

    One-way state machine: pending -> accepted | rejected. Once a
    recommendation leaves pending it can never move again.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def terminal(cls) -> frozenset["RecommendationStatus"]:
        """Statuses a recipient may move a pending recommendation to."""
        return frozenset({cls.ACCEPTED, cls.REJECTED})

    def can_transition_to(self, target: "RecommendationStatus") -> bool:
        """Return True if moving from self to target is allowed."""
        return self is RecommendationStatus.PENDING and target in self.terminal()


class SortField(_ValuesMixin, str, Enum):
    """Sortable property list fields (wire names)."""

    CREATED_AT = "createdAt"
    PRICE = "price"
    AREA = "area"
    BEDROOMS = "bedrooms"


class SortOrder(_ValuesMixin, str, Enum):
    ASC = "asc"
    DESC = "desc"
