"""
Base Repository

This module provides a generic base repository with common data-access operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- get_by_ids()   → Fetch multiple records by UUIDs
- count()        → Count records with equality filters
- create()       → Insert new record
- apply()        → Write fields onto a loaded record and flush

Generic Type Pattern:
=====================
    class ProfileRepository(BaseRepository[Profile]):
        pass

    repo = ProfileRepository(db)
    profile = await repo.get(id)  # Returns Profile, not Any

flush() vs commit():
====================
Repository methods only flush(). The service that owns the unit of work
commits once all of its writes are flushed, so a profile row and its
membership rows either all land or none do.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common data-access operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., Profile, WorkStory)
            session: Async database session
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM profiles WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """
        Get multiple records by their UUIDs in a single IN query.

        Args:
            ids: List of UUIDs to fetch

        Returns:
            List of model instances (may be fewer than requested if some not found)
        """
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Count records with optional equality filtering.

        Args:
            filters: Dict of field=value for WHERE clauses

        Returns:
            Number of matching records
        """
        query = select(sql_count()).select_from(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session and flushes to obtain the
        generated ID and server defaults.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def apply(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Write field changes onto an already-loaded instance and flush.

        Args:
            instance: Loaded model instance
            **kwargs: Fields to update

        Returns:
            The refreshed instance
        """
        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        if hasattr(instance, "touch"):
            instance.touch()

        await self.session.flush()
        await self.session.refresh(instance)
        return instance
