"""
Level2 SQLAlchemy Models

This package contains all database models for the Level2 application.

Model Hierarchy:
================
    User
       ├── stories (WorkStory[])
       │      └── profile_memberships (ProfileStory[])
       ├── profiles (Profile[])
       │      └── memberships (ProfileStory[])   ← ordered by display_order
       └── share_link (ShareLink?)

Models Overview:
================
- Base: Base class and mixins (timestamps, shareable visibility state)
- User: Person bound to an identity provider subject
- WorkStory: Templated, owner-authored content with inline assets
- Profile: Curated shareable subset of a user's stories
- ProfileStory: Ordered junction table for profiles and stories
- ShareLink: Legacy all-stories public link

Usage:
======
    from src.shared.models import User, WorkStory, Profile

    profile = await repo.get(profile_id)
    profile.memberships  # Ordered member stories
"""

from src.shared.models.base import Base, TimestampMixin, ShareableMixin
from src.shared.models.enums import (
    TemplateType,
    StoryStatus,
    AssetType,
    ShareKind,
)
from src.shared.models.user import User
from src.shared.models.work_story import WorkStory
from src.shared.models.profile import Profile
from src.shared.models.profile_story import ProfileStory
from src.shared.models.share_link import ShareLink

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "ShareableMixin",
    # Enums
    "TemplateType",
    "StoryStatus",
    "AssetType",
    "ShareKind",
    # Core models
    "User",
    "WorkStory",
    "Profile",
    "ProfileStory",
    "ShareLink",
]
