"""
Pydantic Schemas

Request and response models for the HTTP API.

Contents:
=========
- common: BaseSchema, error and health responses
- user: Sign-in and current-user schemas
- story: Stories, assets and templates
- profile: Profiles and the legacy share link
- public: The sanitized public view
"""

from src.shared.schemas.common import (
    BaseSchema,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    OwnerClaimMixin,
)
from src.shared.schemas.user import (
    AuthResponse,
    SignInRequest,
    UserResponse,
    UserUpdateRequest,
)
from src.shared.schemas.story import (
    AssetResponse,
    StoryCreateRequest,
    StoryReorderRequest,
    StoryResponse,
    StoryUpdateRequest,
    TemplateResponse,
)
from src.shared.schemas.profile import (
    ProfileCreateRequest,
    ProfileResponse,
    ProfileStoriesRequest,
    ProfileUpdateRequest,
    ShareLinkCreateRequest,
    ShareLinkEnvelope,
    ShareLinkResponse,
    ToggleRequest,
)
from src.shared.schemas.public import PublicAsset, PublicProfileView, PublicStory

__all__ = [
    # Common
    "BaseSchema",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "OwnerClaimMixin",
    # Users
    "AuthResponse",
    "SignInRequest",
    "UserResponse",
    "UserUpdateRequest",
    # Stories
    "AssetResponse",
    "StoryCreateRequest",
    "StoryReorderRequest",
    "StoryResponse",
    "StoryUpdateRequest",
    "TemplateResponse",
    # Profiles
    "ProfileCreateRequest",
    "ProfileResponse",
    "ProfileStoriesRequest",
    "ProfileUpdateRequest",
    "ShareLinkCreateRequest",
    "ShareLinkEnvelope",
    "ShareLinkResponse",
    "ToggleRequest",
    # Public
    "PublicAsset",
    "PublicProfileView",
    "PublicStory",
]
