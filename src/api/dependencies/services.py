"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services only hold the request's db session plus process-wide collaborators
- Each request gets its own db session
- Collaborators (blob store, view counter) come from app.state

Usage:
======
    from src.api.dependencies.services import ProfileServiceDep

    @router.post("/profiles")
    async def create_profile(data: ProfileCreateRequest, service: ProfileServiceDep, ...):
        return await service.create_profile(...)
"""

from typing import Annotated

from fastapi import Depends, Request

from src.api.dependencies.database import DbSession
from src.shared.services.asset_service import AssetService
from src.shared.services.auth_service import AuthService
from src.shared.services.profile_service import ProfileService
from src.shared.services.public_profile_service import PublicProfileService
from src.shared.services.share_link_service import ShareLinkService
from src.shared.services.story_service import StoryService


async def get_auth_service(db: DbSession) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_story_service(db: DbSession, request: Request) -> StoryService:
    return StoryService(db, request.app.state.blob_store)


async def get_asset_service(db: DbSession, request: Request) -> AssetService:
    return AssetService(
        db,
        request.app.state.blob_store,
        max_bytes=request.app.state.settings.MAX_UPLOAD_BYTES,
    )


async def get_profile_service(db: DbSession) -> ProfileService:
    return ProfileService(db)


async def get_share_link_service(db: DbSession) -> ShareLinkService:
    return ShareLinkService(db)


async def get_public_profile_service(db: DbSession, request: Request) -> PublicProfileService:
    """Public read path; views are counted by the app-wide ViewCounter."""
    return PublicProfileService(db, request.app.state.view_counter)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
StoryServiceDep = Annotated[StoryService, Depends(get_story_service)]
AssetServiceDep = Annotated[AssetService, Depends(get_asset_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ShareLinkServiceDep = Annotated[ShareLinkService, Depends(get_share_link_service)]
PublicProfileServiceDep = Annotated[PublicProfileService, Depends(get_public_profile_service)]
