"""
Profile Entity Model

A named, shareable curation of a subset of one user's work stories.

SAMPLE PROFILE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ name             │ "Staff Engineer applications"                             │
│ headline         │ NULL (falls back to the user's headline)                  │
│ bio              │ NULL (falls back to the user's bio)                       │
│ share_token      │ "h7Kp2QxRmN4tWz9c"                                        │
│ is_active        │ true                                                      │
│ expires_at       │ 2024-03-01T00:00:00Z                                      │
│ view_count       │ 12                                                        │
└──────────────────────────────────────────────────────────────────────────────┘

STATE AS SEEN BY THE PUBLIC READ PATH:
    [active, unexpired]  --toggle off-->  [inactive]  --toggle on-->  [active, unexpired]
    [active, unexpired]  --expiry passes-->  [active, expired]
    any state  --regenerate token-->  [active, unexpired, new token]
    any state  --delete-->  gone
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, ShareableMixin, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.user import User
    from src.shared.models.profile_story import ProfileStory


class Profile(Base, TimestampMixin, ShareableMixin):
    """
    Profile model - a curated, shareable subset of a user's stories.

    Every member story must be owned by the profile's owner; this is
    enforced by the ownership guard before membership is written.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owner user ID
        name: Profile name (owner-facing)
        headline: Optional override of the user's headline
        bio: Optional override of the user's bio
        share_token: Unguessable public token (unique)

    Relationships:
        user: The owner
        memberships: Ordered story memberships
    """

    __tablename__ = "profiles"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE METADATA
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    headline: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    bio: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # SHARING
    # ═══════════════════════════════════════════════════════════════════════════

    share_token: Mapped[str] = mapped_column(
        String(16),
        unique=True,
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship(
        "User",
        back_populates="profiles",
    )

    memberships: Mapped[list["ProfileStory"]] = relationship(
        "ProfileStory",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProfileStory.display_order",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Profile(id={self.id}, name={self.name}, active={self.is_active})>"
