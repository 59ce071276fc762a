"""
User Entity Model

Represents a person who signed in through the external identity provider.

Model Hierarchy:
================
    User
       ├── stories (WorkStory[])   - Authored work stories
       ├── profiles (Profile[])    - Curated shareable profiles
       └── share_link (ShareLink?) - Legacy all-stories link

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                │ 550e8400-e29b-41d4-a716-446655440000                     │
│ auth_id           │ "a1b2c3d4-..." (identity provider subject)               │
│ email             │ "dev@level2.bio"                                         │
│ name              │ "Dev User"                                               │
│ headline          │ "Software Engineer"                                      │
│ bio               │ NULL                                                     │
│ profile_photo_url │ NULL                                                     │
└──────────────────────────────────────────────────────────────────────────────┘

The id, auth_id and email never leave the owner's own API responses;
the public projection only carries display fields.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin


# TYPE_CHECKING block prevents circular imports while enabling type hints
if TYPE_CHECKING:
    from src.shared.models.work_story import WorkStory
    from src.shared.models.profile import Profile
    from src.shared.models.share_link import ShareLink


class User(Base, TimestampMixin):
    """
    User model bound 1:1 to an identity provider subject.

    Created on first successful authentication, mutated only by the user,
    never deleted by this service.

    Attributes:
        id: Unique identifier (UUID v4)
        auth_id: Identity provider subject (unique)
        email: Email reported by the provider, if any
        name: Display name
        headline: Optional one-line headline
        bio: Optional longer bio
        profile_photo_url: Optional avatar URL
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    # Subject of the external identity provider session
    auth_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(320),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # DISPLAY FIELDS
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

    profile_photo_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    stories: Mapped[list["WorkStory"]] = relationship(
        "WorkStory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    profiles: Mapped[list["Profile"]] = relationship(
        "Profile",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    share_link: Mapped[Optional["ShareLink"]] = relationship(
        "ShareLink",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, name={self.name})>"
