"""Base repository: generic lookups and committing writes."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from listings.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, create, update and delete.

    Write methods commit before returning so callers can invalidate caches
    strictly after the change is durable. A unique-constraint violation on
    commit is rolled back and passed to _on_integrity_error, which subclasses
    override to raise the matching domain exception.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None.

        populate_existing reloads rows already in the identity map, so a
        record written earlier in the session comes back with eager
        relationships loaded.
        """
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and commit."""
        self.db.add(obj)
        await self.commit()
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and commit."""
        await self.commit()
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record and commit."""
        await self.db.delete(obj)
        await self.commit()

    async def commit(self) -> None:
        """Commit the session; on IntegrityError roll back and delegate to _on_integrity_error."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(
                "Integrity error on %s commit: %s", self.model.__name__, e.orig
            )
            self._on_integrity_error(e)
            raise

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        """Override to raise a domain exception; returning re-raises exc."""

    @staticmethod
    def is_unique_violation(exc: IntegrityError, constraint: str) -> bool:
        """True if exc is a UNIQUE failure (SQLite names columns, Postgres the constraint)."""
        message = str(exc.orig).lower()
        return constraint in message or "unique" in message

    @staticmethod
    def is_foreign_key_violation(exc: IntegrityError) -> bool:
        return "foreign key" in str(exc.orig).lower()
