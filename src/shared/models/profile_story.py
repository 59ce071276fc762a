"""
ProfileStory Entity Model

Ordered junction table linking WorkStories to Profiles.

SAMPLE PROFILE_STORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ profile_id       │ 550e8400-e29b-41d4-a716-446655440000                      │
│ work_story_id    │ 660e8400-e29b-41d4-a716-446655440000                      │
│ display_order    │ 0                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base


if TYPE_CHECKING:
    from src.shared.models.profile import Profile
    from src.shared.models.work_story import WorkStory


class ProfileStory(Base):
    """
    ProfileStory model - one story's membership in one profile.

    Display order is the story's index in the list the owner submitted.
    Rows disappear with either the profile or the story.

    Attributes:
        profile_id: The profile (part of composite PK)
        work_story_id: The member story (part of composite PK)
        display_order: Position within the profile
    """

    __tablename__ = "profile_stories"

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPOSITE PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )

    work_story_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("work_stories.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="memberships",
    )

    work_story: Mapped["WorkStory"] = relationship(
        "WorkStory",
        back_populates="profile_memberships",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<ProfileStory(profile_id={self.profile_id}, "
            f"story_id={self.work_story_id}, order={self.display_order})>"
        )
