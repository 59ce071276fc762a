"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Level2.
It includes the declarative base, the portable JSON column type and the
timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── TimestampMixin   ← Automatic created_at/updated_at
       │
       └── ShareableMixin   ← is_active / expires_at / view counter

Usage:
======
    from src.shared.models.base import Base, TimestampMixin

    class Profile(Base, TimestampMixin):
        __tablename__ = "profiles"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
        name: Mapped[str] = mapped_column(Text)
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    This is the declarative base that all models inherit from. It provides:
    - Type annotation support for columns
    - JSON type mapping (JSONB on PostgreSQL) for dict-typed columns

    Example:
        class User(Base, TimestampMixin):
            __tablename__ = "users"

            id: Mapped[uuid.UUID] = mapped_column(
                Uuid,
                primary_key=True,
                default=uuid.uuid4
            )
    """

    # Map Python dict type to JSON / JSONB for flexible storage
    type_annotation_map = {
        dict[str, Any]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Services also call touch() explicitly when a mutation only changes
    child rows (e.g. profile membership), so clients can always use
    updated_at for cache invalidation.

    Example values:
        created_at: 2024-01-15T10:30:00Z (when record was created)
        updated_at: 2024-01-16T14:45:30Z (last modification time)
    """

    # Timestamp when the record was created
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    # Timestamp when the record was last updated
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.updated_at = utcnow()


class ShareableMixin:
    """
    Mixin for entities that can be opened through a public share token.

    Profile and ShareLink both carry the same visibility state, so the
    visibility rule is evaluated against these columns only:

        visible  ⇔  is_active AND (expires_at IS NULL OR expires_at > now)

    Example values:
        is_active: True
        expires_at: None                 (never expires)
        view_count: 42
        last_viewed_at: 2024-02-01T08:00:00Z
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    # Incremented atomically by the view counter, never read-modify-write
    view_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    last_viewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
