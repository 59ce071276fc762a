"""
Profile Handler

Owner endpoints for shareable profiles.

Every mutation goes through ProfileService, which checks the session
principal owns the profile (and every story) before writing.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import CurrentPrincipal, ProfileServiceDep
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.profile import (
    OwnerClaimRequest,
    ProfileCreateRequest,
    ProfileResponse,
    ProfileStoriesRequest,
    ProfileUpdateRequest,
    ToggleRequest,
)


router = APIRouter()


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(principal: CurrentPrincipal, service: ProfileServiceDep):
    """The caller's profiles, newest first."""
    profiles = await service.list_profiles(principal)
    return [ProfileResponse.from_profile(profile) for profile in profiles]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    data: ProfileCreateRequest,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
):
    """Create an active profile with a fresh share token."""
    profile = await service.create_profile(
        principal,
        name=data.name,
        story_ids=data.story_ids,
        headline=data.headline,
        bio=data.bio,
        expires_at=data.expires_at,
        owner_id=data.user_id,
    )
    return ProfileResponse.from_profile(profile)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: UUID, principal: CurrentPrincipal, service: ProfileServiceDep):
    return ProfileResponse.from_profile(await service.get_profile(profile_id, principal))


@router.patch("/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: UUID,
    data: ProfileUpdateRequest,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
):
    """
    Partially update a profile.

    Fields sent as null clear the override; omitted fields are untouched.
    """
    patch = data.model_dump(exclude_unset=True, exclude={"user_id"})
    profile = await service.update_profile(profile_id, principal, patch, owner_id=data.user_id)
    return ProfileResponse.from_profile(profile)


@router.delete("/{profile_id}", response_model=MessageResponse)
async def delete_profile(profile_id: UUID, principal: CurrentPrincipal, service: ProfileServiceDep):
    await service.delete_profile(profile_id, principal)
    return MessageResponse(message="Profile deleted")


@router.post("/{profile_id}/toggle", response_model=ProfileResponse)
async def toggle_profile(
    profile_id: UUID,
    data: ToggleRequest,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
):
    profile = await service.toggle_profile(profile_id, principal, data.is_active, owner_id=data.user_id)
    return ProfileResponse.from_profile(profile)


@router.post("/{profile_id}/regenerate-token", response_model=ProfileResponse)
async def regenerate_token(
    profile_id: UUID,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
    data: Optional[OwnerClaimRequest] = None,
):
    """Issue a new token and re-activate; the old link stops working immediately."""
    owner_id = data.user_id if data else None
    profile = await service.regenerate_token(profile_id, principal, owner_id=owner_id)
    return ProfileResponse.from_profile(profile)


@router.put("/{profile_id}/stories", response_model=ProfileResponse)
async def update_profile_stories(
    profile_id: UUID,
    data: ProfileStoriesRequest,
    principal: CurrentPrincipal,
    service: ProfileServiceDep,
):
    """Replace the profile's story list; list order is display order."""
    profile = await service.update_profile_stories(
        profile_id, principal, data.story_ids, owner_id=data.user_id
    )
    return ProfileResponse.from_profile(profile)
