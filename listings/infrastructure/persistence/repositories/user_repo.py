"""User repository. Lookups by id/email and registration."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from listings.domain.exceptions import DuplicateResourceException
from listings.infrastructure.persistence.models.user import User
from listings.infrastructure.persistence.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased and trimmed."""
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """User repository. Email uniqueness is enforced by the app_user.email constraint."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create_user(self, email: str, name: str, hashed_password: str) -> User:
        """Insert a user. Raises DuplicateResourceException if the email is taken."""
        user = User(
            email=normalize_email(email),
            name=name.strip(),
            hashed_password=hashed_password,
        )
        return await self.create(user)

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        raise DuplicateResourceException("Email already registered", "user") from exc
