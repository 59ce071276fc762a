"""
ShareLink Entity Model

Legacy single share link per user. Exposes all of the owner's stories and
follows exactly the same visibility rule as Profile.

SAMPLE SHARE_LINK RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000 (unique)             │
│ token            │ "Tq8mZ3vKp7RxA2nd"                                        │
│ is_active        │ true                                                      │
│ expires_at       │ NULL                                                      │
│ view_count       │ 5                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, ShareableMixin, TimestampMixin


if TYPE_CHECKING:
    from src.shared.models.user import User


class ShareLink(Base, TimestampMixin, ShareableMixin):
    """
    ShareLink model - one all-stories public link per user.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owner user ID (unique, at most one link per user)
        token: Unguessable public token (unique)
    """

    __tablename__ = "share_links"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    token: Mapped[str] = mapped_column(
        String(16),
        unique=True,
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="share_link",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ShareLink(id={self.id}, user_id={self.user_id}, active={self.is_active})>"
