"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── UserRepository             ← Identity provider lookups
         ├── WorkStoryRepository        ← Owner's stories, ownership sets
         ├── ProfileRepository          ← Token lookup, eager stories, view counter
         ├── ProfileStoryRepository     ← Ordered membership replace
         └── ShareLinkRepository        ← Legacy share link

Usage Example:
==============
    from src.shared.repositories import ProfileRepository

    repo = ProfileRepository(db)
    profile = await repo.get_by_token(token)
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.user_repository import UserRepository
from src.shared.repositories.work_story_repository import WorkStoryRepository
from src.shared.repositories.profile_repository import (
    ProfileRepository,
    ProfileStoryRepository,
)
from src.shared.repositories.share_link_repository import ShareLinkRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "WorkStoryRepository",
    "ProfileRepository",
    "ProfileStoryRepository",
    "ShareLinkRepository",
]
