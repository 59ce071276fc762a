"""
Public View Schemas

The only shapes the unauthenticated read path returns. Owner ids, auth
identifiers, email addresses, story ids and storage paths have no field
here, so they cannot leak through serialization.

PUBLIC VIEW:
┌──────────────────────────────────────────────────────────────────────────────┐
│ name              │ "Ada Lovelace"                                           │
│ headline          │ "Staff Engineer" (profile override → user default)       │
│ bio               │ "..."            (profile override → user default)       │
│ profile_photo_url │ "https://..."                                            │
│ title             │ "Backend work"   (profile name; null for a share link)   │
│ stories           │ [{title, template_type, responses, assets, video...}]    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from src.shared.models.enums import AssetType, TemplateType


class PublicAsset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: AssetType
    size: int
    url: str
    mime_type: str


class PublicStory(BaseModel):
    title: str
    template_type: TemplateType
    responses: dict[str, Any]
    assets: List[PublicAsset]
    video_url: Optional[str] = None
    video_embed_url: Optional[str] = None


class PublicProfileView(BaseModel):
    """Sanitized projection served at {PUBLIC_PROFILE_PREFIX}/{token}."""

    name: str
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_photo_url: Optional[str] = None
    title: Optional[str] = None
    stories: List[PublicStory]
