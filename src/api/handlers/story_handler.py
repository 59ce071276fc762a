"""
Story Handler

Work story authoring, ordering, assets and the template catalogue.

ARCHITECTURE:
=============
    Handler → StoryService / AssetService → OwnershipGuard → Repository

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, File, UploadFile, status

from src.api.dependencies import AssetServiceDep, CurrentPrincipal, StoryServiceDep
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.story import (
    AssetResponse,
    StoryCreateRequest,
    StoryReorderRequest,
    StoryResponse,
    StoryUpdateRequest,
    TemplateResponse,
)
from src.shared.services.story_templates import list_templates


router = APIRouter()
templates_router = APIRouter()


@templates_router.get("", response_model=List[TemplateResponse])
async def get_templates():
    """All story templates with their guided prompts."""
    return [TemplateResponse.model_validate(template) for template in list_templates()]


@router.get("", response_model=List[StoryResponse])
async def list_stories(principal: CurrentPrincipal, service: StoryServiceDep):
    """The caller's stories in display order."""
    return await service.list_stories(principal)


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    data: StoryCreateRequest,
    principal: CurrentPrincipal,
    service: StoryServiceDep,
):
    """Create a draft story from a template, appended to the caller's list."""
    return await service.create_story(
        principal,
        template_type=data.template_type,
        title=data.title,
        owner_id=data.user_id,
    )


@router.put("/order", response_model=List[StoryResponse])
async def reorder_stories(
    data: StoryReorderRequest,
    principal: CurrentPrincipal,
    service: StoryServiceDep,
):
    """Set the display order of the caller's stories."""
    return await service.reorder_stories(principal, data.story_ids, owner_id=data.user_id)


@router.get("/{story_id}", response_model=StoryResponse)
async def get_story(story_id: UUID, principal: CurrentPrincipal, service: StoryServiceDep):
    return await service.get_story(story_id, principal)


@router.patch("/{story_id}", response_model=StoryResponse)
async def update_story(
    story_id: UUID,
    data: StoryUpdateRequest,
    principal: CurrentPrincipal,
    service: StoryServiceDep,
):
    """
    Partially update a story.

    Only fields present in the body are applied.
    """
    patch = data.model_dump(exclude_unset=True, exclude={"user_id"})
    return await service.update_story(story_id, principal, patch, owner_id=data.user_id)


@router.delete("/{story_id}", response_model=MessageResponse)
async def delete_story(story_id: UUID, principal: CurrentPrincipal, service: StoryServiceDep):
    """Delete a story; it disappears from every profile."""
    await service.delete_story(story_id, principal)
    return MessageResponse(message="Story deleted")


@router.post(
    "/{story_id}/assets",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_asset(
    story_id: UUID,
    principal: CurrentPrincipal,
    service: AssetServiceDep,
    file: UploadFile = File(...),
):
    """Upload an image, video or PDF and attach it to the story."""
    data = await file.read()
    return await service.upload_asset(
        story_id,
        principal,
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )


@router.delete("/{story_id}/assets/{asset_id}", response_model=MessageResponse)
async def remove_asset(
    story_id: UUID,
    asset_id: str,
    principal: CurrentPrincipal,
    service: AssetServiceDep,
):
    await service.remove_asset(story_id, principal, asset_id)
    return MessageResponse(message="Asset removed")
