"""
Profile Schemas

Request/response models for shareable profiles and the legacy share link.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.profile import Profile
from src.shared.schemas.common import BaseSchema, OwnerClaimMixin, TimestampMixin
from src.shared.schemas.story import StoryResponse


class ProfileCreateRequest(OwnerClaimMixin):
    """Request to create a profile."""

    name: str
    story_ids: List[str] = Field(default_factory=list, description="Ordered story ids")
    headline: Optional[str] = None
    bio: Optional[str] = None
    expires_at: Optional[datetime] = None


class ProfileUpdateRequest(OwnerClaimMixin):
    """
    Partial profile update.

    Send null for headline, bio or expires_at to clear them.
    """

    name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    expires_at: Optional[datetime] = None


class ToggleRequest(OwnerClaimMixin):
    """Set the public visibility flag."""

    is_active: bool


class ProfileStoriesRequest(OwnerClaimMixin):
    """Replacement story list; order is display order."""

    story_ids: List[str]


class OwnerClaimRequest(OwnerClaimMixin):
    """Body of actions that carry no other input."""


class ProfileResponse(BaseSchema, TimestampMixin):
    """A profile as its owner sees it."""

    id: UUID
    name: str
    headline: Optional[str] = None
    bio: Optional[str] = None
    share_token: str
    is_active: bool
    expires_at: Optional[datetime] = None
    view_count: int
    last_viewed_at: Optional[datetime] = None
    story_ids: List[UUID]
    stories: List[StoryResponse]

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        """Build from a profile whose memberships and stories are loaded."""
        stories = [membership.work_story for membership in profile.memberships]
        return cls(
            id=profile.id,
            name=profile.name,
            headline=profile.headline,
            bio=profile.bio,
            share_token=profile.share_token,
            is_active=profile.is_active,
            expires_at=profile.expires_at,
            view_count=profile.view_count,
            last_viewed_at=profile.last_viewed_at,
            story_ids=[story.id for story in stories],
            stories=[StoryResponse.model_validate(story) for story in stories],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ShareLinkCreateRequest(OwnerClaimMixin):
    expires_at: Optional[datetime] = None


class ShareLinkResponse(BaseSchema, TimestampMixin):
    """The owner's legacy share link."""

    id: UUID
    token: str
    is_active: bool
    expires_at: Optional[datetime] = None
    view_count: int
    last_viewed_at: Optional[datetime] = None


class ShareLinkEnvelope(BaseModel):
    """GET /share-link answers with null when no link exists."""

    share_link: Optional[ShareLinkResponse] = None
