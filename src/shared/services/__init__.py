"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → OwnershipGuard → Repository → Database
                ↘ BlobStore

Services should:
- Resolve the acting user from the session principal only
- Validate input before the first write
- Commit each unit of work once
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService / identity providers: Sign-in and the current user record
- StoryService: Work story authoring and ordering
- AssetService: Story file uploads
- ProfileService: Shareable profiles and their story lists
- ShareLinkService: The legacy single share link
- PublicProfileService: Token → public view
- ViewCounter: Detached view count increments
"""

from src.shared.services.auth_service import (
    AuthService,
    AuthSession,
    AuthUser,
    IdentityProvider,
    JWTIdentityProvider,
    MockIdentityProvider,
    Principal,
    create_identity_provider,
)
from src.shared.services.asset_service import AssetService
from src.shared.services.ownership_guard import OwnershipGuard
from src.shared.services.profile_service import ProfileService
from src.shared.services.public_profile_service import PublicProfileService
from src.shared.services.share_link_service import ShareLinkService
from src.shared.services.story_service import StoryService
from src.shared.services.view_counter import ViewCounter
from src.shared.services.visibility import is_publicly_visible, request_now

__all__ = [
    "AuthService",
    "AuthSession",
    "AuthUser",
    "IdentityProvider",
    "JWTIdentityProvider",
    "MockIdentityProvider",
    "Principal",
    "create_identity_provider",
    "AssetService",
    "OwnershipGuard",
    "ProfileService",
    "PublicProfileService",
    "ShareLinkService",
    "StoryService",
    "ViewCounter",
    "is_publicly_visible",
    "request_now",
]
