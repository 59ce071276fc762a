"""
Share Link Handler

Owner endpoints for the legacy single share link, which exposes all of
the owner's stories.
"""

from typing import Optional

from fastapi import APIRouter, status

from src.api.dependencies import CurrentPrincipal, ShareLinkServiceDep
from src.shared.schemas.profile import (
    OwnerClaimRequest,
    ShareLinkCreateRequest,
    ShareLinkEnvelope,
    ShareLinkResponse,
    ToggleRequest,
)


router = APIRouter()


@router.get("", response_model=ShareLinkEnvelope)
async def get_share_link(principal: CurrentPrincipal, service: ShareLinkServiceDep):
    """The caller's share link, or null."""
    link = await service.get_share_link(principal)
    return ShareLinkEnvelope(share_link=ShareLinkResponse.model_validate(link) if link else None)


@router.post("", response_model=ShareLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_share_link(
    principal: CurrentPrincipal,
    service: ShareLinkServiceDep,
    data: Optional[ShareLinkCreateRequest] = None,
):
    """Create the caller's share link (409 if one exists)."""
    data = data or ShareLinkCreateRequest()
    return await service.create_share_link(principal, expires_at=data.expires_at, owner_id=data.user_id)


@router.post("/toggle", response_model=ShareLinkResponse)
async def toggle_share_link(
    data: ToggleRequest,
    principal: CurrentPrincipal,
    service: ShareLinkServiceDep,
):
    return await service.toggle_share_link(principal, data.is_active, owner_id=data.user_id)


@router.post("/regenerate", response_model=ShareLinkResponse)
async def regenerate_share_link(
    principal: CurrentPrincipal,
    service: ShareLinkServiceDep,
    data: Optional[OwnerClaimRequest] = None,
):
    """New token, active again; the old token stops working immediately."""
    owner_id = data.user_id if data else None
    return await service.regenerate_share_link(principal, owner_id=owner_id)
