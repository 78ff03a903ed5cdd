"""User ORM model for authentication."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from listings.infrastructure.persistence.database import Base
from listings.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is unique (stored lower-cased)."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
