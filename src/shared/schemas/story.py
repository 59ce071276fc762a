"""
Story Schemas

Request/response models for work stories, assets and templates.
"""

from typing import Any, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.models.enums import AssetType, StoryStatus, TemplateType
from src.shared.schemas.common import BaseSchema, OwnerClaimMixin, TimestampMixin


class StoryCreateRequest(OwnerClaimMixin):
    """Request to create a story from a template."""

    template_type: str = Field(description="project | role_highlight | lessons_learned")
    title: str


class StoryUpdateRequest(OwnerClaimMixin):
    """
    Partial story update.

    Only fields present in the body are applied. `assets` reorders or drops
    already attached assets, given as ids or asset objects.
    """

    title: Optional[str] = None
    responses: Optional[dict[str, Any]] = None
    status: Optional[str] = None
    video_url: Optional[str] = None
    assets: Optional[List[Union[str, dict[str, Any]]]] = None


class StoryReorderRequest(OwnerClaimMixin):
    """The owner's story ids in their new order."""

    story_ids: List[str]


class AssetResponse(BaseModel):
    """An attached file."""

    id: str
    name: str
    type: AssetType
    size: int
    url: str
    path: Optional[str] = None
    mime_type: str


class StoryResponse(BaseSchema, TimestampMixin):
    """A work story as its owner sees it."""

    id: UUID
    user_id: UUID
    template_type: TemplateType
    title: str
    responses: dict[str, Any]
    assets: List[AssetResponse]
    video_url: Optional[str] = None
    status: StoryStatus
    display_order: int


class TemplatePromptResponse(BaseSchema):
    key: str
    label: str
    placeholder: str
    hint: Optional[str] = None


class TemplateResponse(BaseSchema):
    """A story template and its guided prompts."""

    type: TemplateType
    name: str
    description: str
    prompts: List[TemplatePromptResponse]
