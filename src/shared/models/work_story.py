"""
WorkStory Entity Model

A unit of authored content created from a guided template.

SAMPLE WORK_STORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ template_type    │ project                                                   │
│ title            │ "Migrating billing to event sourcing"                     │
│ responses        │ {"problem": "...", "approach": "...", "outcome": "..."}   │
│ assets           │ [{"id": "...", "name": "diagram.png", "type": "image"...}]│
│ video_url        │ "https://youtu.be/dQw4w9WgXcQ"                            │
│ status           │ draft                                                     │
│ display_order    │ 3                                                         │
└──────────────────────────────────────────────────────────────────────────────┘

Assets are stored inline as a JSON array; each entry carries
id, name, type, size, url, path and mime_type. The blob itself lives in the
blob store under {user_id}/{story_id}/...
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, JSONType, TimestampMixin
from src.shared.models.enums import StoryStatus, TemplateType, enum_values


if TYPE_CHECKING:
    from src.shared.models.user import User
    from src.shared.models.profile_story import ProfileStory


class WorkStory(Base, TimestampMixin):
    """
    WorkStory model - owner-authored templated content.

    Owned exclusively by its creator. Deleting a story cascades its
    membership in every profile.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owner user ID
        template_type: project | role_highlight | lessons_learned
        title: Story title
        responses: Mapping of prompt key to markdown response
        assets: Ordered list of attached asset records
        video_url: Optional YouTube URL
        status: draft | published
        display_order: Position in the owner's story list
    """

    __tablename__ = "work_stories"

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
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    template_type: Mapped[TemplateType] = mapped_column(
        SQLEnum(TemplateType, name="templatetype", values_callable=enum_values),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # prompt key -> markdown
    responses: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )

    assets: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
    )

    video_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    status: Mapped[StoryStatus] = mapped_column(
        SQLEnum(StoryStatus, name="storystatus", values_callable=enum_values),
        nullable=False,
        default=StoryStatus.DRAFT,
    )

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship(
        "User",
        back_populates="stories",
    )

    profile_memberships: Mapped[list["ProfileStory"]] = relationship(
        "ProfileStory",
        back_populates="work_story",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<WorkStory(id={self.id}, title={self.title}, template={self.template_type})>"
