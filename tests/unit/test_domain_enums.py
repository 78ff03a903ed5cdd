"""Tests for domain enums and the recommendation state machine."""

import pytest

from listings.domain.enums import (
    PropertyStatus,
    PropertyType,
    RecommendationStatus,
    SortField,
)


def test_values_lists_wire_values() -> None:
    assert PropertyStatus.values() == ["available", "sold", "pending"]
    assert "apartment" in PropertyType.values()
    assert SortField.CREATED_AT.value == "createdAt"


@pytest.mark.parametrize(
    "target", [RecommendationStatus.ACCEPTED, RecommendationStatus.REJECTED]
)
def test_pending_moves_to_terminal(target: RecommendationStatus) -> None:
    assert RecommendationStatus.PENDING.can_transition_to(target)


def test_pending_cannot_move_to_pending() -> None:
    assert not RecommendationStatus.PENDING.can_transition_to(RecommendationStatus.PENDING)


@pytest.mark.parametrize(
    "current", [RecommendationStatus.ACCEPTED, RecommendationStatus.REJECTED]
)
def test_terminal_statuses_never_move(current: RecommendationStatus) -> None:
    for target in RecommendationStatus:
        assert not current.can_transition_to(target)
