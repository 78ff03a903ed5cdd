"""Integration tests for repositories against a real (SQLite) database."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from listings.application.dtos import PropertyData, PropertyFilters
from listings.domain.enums import RecommendationStatus, SortField, SortOrder
from listings.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from listings.infrastructure.persistence.models import Favorite, Recommendation, User
from listings.infrastructure.persistence.repositories import (
    FavoriteRepository,
    PropertyRepository,
    RecommendationRepository,
    UserRepository,
)


def _data(**overrides) -> PropertyData:
    values = dict(
        title="Sunny apartment",
        description="Near the park",
        price=250000,
        address="12 Main St",
        city="Austin",
        state="TX",
        zip_code="78701",
        property_type="apartment",
        bedrooms=2,
        bathrooms=1.5,
        area=900,
        amenities=("pool", "gym"),
    )
    values.update(overrides)
    return PropertyData(**values)


async def _user(db: AsyncSession, email: str) -> User:
    return await UserRepository(db).create_user(email, "Someone", "hashed")


class TestUserRepository:
    async def test_email_is_normalized(self, db_session: AsyncSession) -> None:
        repo = UserRepository(db_session)
        user = await repo.create_user("  Alice@Example.COM ", "Alice", "hashed")
        assert user.email == "alice@example.com"
        found = await repo.get_by_email("ALICE@example.com")
        assert found is not None and found.id == user.id

    async def test_duplicate_email_raises_domain_error(self, db_session: AsyncSession) -> None:
        repo = UserRepository(db_session)
        await repo.create_user("bob@example.com", "Bob", "hashed")
        with pytest.raises(DuplicateResourceException, match="Email already registered"):
            await repo.create_user("BOB@example.com", "Bobby", "hashed")


class TestPropertyRepository:
    async def test_create_loads_owner_and_amenities(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        prop = await PropertyRepository(db_session).create_property(owner.id, _data())
        assert prop.owner.id == owner.id
        assert sorted(prop.amenities) == ["gym", "pool"]
        assert prop.status == "available"

    async def test_amenity_filter_requires_all(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        repo = PropertyRepository(db_session)
        both = await repo.create_property(owner.id, _data(amenities=("pool", "gym", "sauna")))
        await repo.create_property(owner.id, _data(amenities=("pool",)))

        rows, total = await repo.search(PropertyFilters(amenities=("gym", "pool")))

        assert total == 1
        assert [r.id for r in rows] == [both.id]

    async def test_price_range_city_substring_and_sort(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        repo = PropertyRepository(db_session)
        for price, city in ((100, "Austin"), (200, "South Austin"), (300, "Dallas"), (400, "Austin")):
            await repo.create_property(owner.id, _data(price=price, city=city))

        rows, total = await repo.search(
            PropertyFilters(
                min_price=150,
                max_price=450,
                city="austin",
                sort=SortField.PRICE,
                order=SortOrder.ASC,
            )
        )

        assert total == 2
        assert [r.price for r in rows] == [200, 400]

    async def test_pagination_reports_full_total(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        repo = PropertyRepository(db_session)
        for i in range(5):
            await repo.create_property(owner.id, _data(price=i))

        rows, total = await repo.search(
            PropertyFilters(page=2, limit=2, sort=SortField.PRICE, order=SortOrder.ASC)
        )

        assert total == 5
        assert [r.price for r in rows] == [2, 3]

    async def test_replace_overwrites_amenities(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        repo = PropertyRepository(db_session)
        prop = await repo.create_property(owner.id, _data())

        updated = await repo.replace_property(prop, _data(title="Renamed", amenities=("garden",)))

        assert updated.title == "Renamed"
        assert updated.amenities == ["garden"]

    async def test_delete_cascades_to_favorites_and_recommendations(
        self, db_session: AsyncSession
    ) -> None:
        owner = await _user(db_session, "owner@example.com")
        other = await _user(db_session, "other@example.com")
        repo = PropertyRepository(db_session)
        prop = await repo.create_property(owner.id, _data())
        await FavoriteRepository(db_session).add(other.id, prop.id)
        await RecommendationRepository(db_session).create_recommendation(
            owner.id, other.id, prop.id
        )
        assert await repo.favorited_by(prop.id) == [other.id]
        assert await repo.recommendation_participants(prop.id) == [(owner.id, other.id)]

        await repo.delete(prop)

        assert not await repo.exists(prop.id)
        assert await db_session.scalar(select(func.count()).select_from(Favorite)) == 0
        assert await db_session.scalar(select(func.count()).select_from(Recommendation)) == 0


class TestFavoriteRepository:
    async def test_pair_is_unique(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        prop = await PropertyRepository(db_session).create_property(owner.id, _data())
        repo = FavoriteRepository(db_session)
        await repo.add(owner.id, prop.id)

        with pytest.raises(DuplicateResourceException, match="Property already in favorites"):
            await repo.add(owner.id, prop.id)

    async def test_remove_reports_whether_a_row_was_deleted(
        self, db_session: AsyncSession
    ) -> None:
        owner = await _user(db_session, "owner@example.com")
        prop = await PropertyRepository(db_session).create_property(owner.id, _data())
        repo = FavoriteRepository(db_session)
        await repo.add(owner.id, prop.id)

        assert await repo.remove(owner.id, prop.id) is True
        assert await repo.remove(owner.id, prop.id) is False
        assert await repo.list_for_user(owner.id) == []

    async def test_missing_property_is_not_found(self, db_session: AsyncSession) -> None:
        owner = await _user(db_session, "owner@example.com")
        repo = FavoriteRepository(db_session)

        with pytest.raises(ResourceNotFoundException, match="Property not found"):
            await repo.add(owner.id, "missing-property")
        assert await repo.list_for_user(owner.id) == []

    async def test_other_integrity_errors_are_left_to_propagate(
        self, db_session: AsyncSession
    ) -> None:
        exc = IntegrityError("INSERT", {}, Exception("CHECK constraint failed: status"))

        assert FavoriteRepository(db_session)._on_integrity_error(exc) is None


class TestRecommendationRepository:
    async def _setup(self, db: AsyncSession):
        sender = await _user(db, "sender@example.com")
        recipient = await _user(db, "recipient@example.com")
        prop = await PropertyRepository(db).create_property(sender.id, _data())
        return sender, recipient, prop

    async def test_triple_is_unique(self, db_session: AsyncSession) -> None:
        sender, recipient, prop = await self._setup(db_session)
        repo = RecommendationRepository(db_session)
        await repo.create_recommendation(sender.id, recipient.id, prop.id, "Look")
        assert await repo.exists(sender.id, recipient.id, prop.id)

        with pytest.raises(DuplicateResourceException, match="Recommendation already sent"):
            await repo.create_recommendation(sender.id, recipient.id, prop.id)

    async def test_missing_property_is_not_found(self, db_session: AsyncSession) -> None:
        sender, recipient, _ = await self._setup(db_session)
        repo = RecommendationRepository(db_session)

        with pytest.raises(ResourceNotFoundException, match="Property not found"):
            await repo.create_recommendation(sender.id, recipient.id, "missing-property")
        assert not await repo.exists(sender.id, recipient.id, "missing-property")

    async def test_transition_happens_once(self, db_session: AsyncSession) -> None:
        sender, recipient, prop = await self._setup(db_session)
        repo = RecommendationRepository(db_session)
        rec = await repo.create_recommendation(sender.id, recipient.id, prop.id)

        assert await repo.transition_from_pending(
            rec.id, recipient.id, RecommendationStatus.ACCEPTED
        )
        assert not await repo.transition_from_pending(
            rec.id, recipient.id, RecommendationStatus.REJECTED
        )
        reloaded = await repo.get_for_recipient(rec.id, recipient.id)
        assert reloaded is not None
        assert reloaded.status == "accepted"

    async def test_only_recipient_can_transition(self, db_session: AsyncSession) -> None:
        sender, recipient, prop = await self._setup(db_session)
        repo = RecommendationRepository(db_session)
        rec = await repo.create_recommendation(sender.id, recipient.id, prop.id)

        assert not await repo.transition_from_pending(
            rec.id, sender.id, RecommendationStatus.ACCEPTED
        )
        assert await repo.get_for_recipient(rec.id, sender.id) is None

    async def test_lists_are_scoped_per_side(self, db_session: AsyncSession) -> None:
        sender, recipient, prop = await self._setup(db_session)
        repo = RecommendationRepository(db_session)
        await repo.create_recommendation(sender.id, recipient.id, prop.id)

        received = await repo.list_received(recipient.id)
        sent = await repo.list_sent(sender.id)

        assert len(received) == 1 and received[0].sender.id == sender.id
        assert len(sent) == 1 and sent[0].recipient.id == recipient.id
        assert await repo.list_received(sender.id) == []
