"""
Profile Repository

Database operations for shareable profiles and their ordered memberships.

Common Operations:
==================
- get_by_token()          → Exact share-token lookup (public read path)
- get_with_stories()      → Profile with memberships and stories loaded
- list_for_user()         → Owner's profiles with stories, newest first
- token_exists()          → Collision check for freshly generated tokens
- increment_view()        → Atomic view_count + 1

ProfileStoryRepository:
=======================
- list_stories()          → Member stories in display order
- replace()               → Delete-all-then-insert-ordered, inside the caller's transaction
- delete_for_story()      → Drop a story from every profile
"""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy import update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.shared.repositories.base import BaseRepository
from src.shared.models.profile import Profile
from src.shared.models.profile_story import ProfileStory
from src.shared.models.work_story import WorkStory


def _with_stories():
    """Loader option: memberships and their stories, eagerly."""
    return selectinload(Profile.memberships).selectinload(ProfileStory.work_story)


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Profile, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_token(self, token: str) -> Optional[Profile]:
        """
        Get a profile by exact share-token match.

        Args:
            token: Share token (already format-validated by the caller)

        Returns:
            Profile if a row carries this token, None otherwise
        """
        result = await self.session.execute(select(Profile).where(Profile.share_token == token))
        return result.scalar_one_or_none()

    async def get_with_stories(self, profile_id: UUID) -> Optional[Profile]:
        """
        Get a profile with memberships and member stories loaded.

        populate_existing() makes sure a profile already in the session
        reflects a membership replace that happened in this transaction.
        """
        result = await self.session.execute(
            select(Profile)
            .where(Profile.id == profile_id)
            .options(_with_stories())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> List[Profile]:
        """
        Get all profiles for a user with stories, newest first.

        Args:
            user_id: Owner's UUID

        Returns:
            List of Profile ordered by created_at descending
        """
        result = await self.session.execute(
            select(Profile)
            .where(Profile.user_id == user_id)
            .options(_with_stories())
            .order_by(Profile.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of profiles owned by a user."""
        return await self.count(filters={"user_id": user_id})

    async def token_exists(self, token: str) -> bool:
        """Check whether any profile already uses this token."""
        return await self.get_by_token(token) is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # VIEW COUNTER
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_view(self, profile_id: UUID, viewed_at: datetime) -> None:
        """
        Atomically increment the view counter.

        SQL Generated:
            UPDATE profiles
            SET view_count = view_count + 1, last_viewed_at = '...'
            WHERE id = '...'
        """
        await self.session.execute(
            sql_update(Profile)
            .where(Profile.id == profile_id)
            .values(view_count=Profile.view_count + 1, last_viewed_at=viewed_at)
            .execution_options(synchronize_session=False)
        )


class ProfileStoryRepository(BaseRepository[ProfileStory]):
    """Repository for ordered profile membership rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ProfileStory, session)

    async def list_stories(self, profile_id: UUID) -> List[WorkStory]:
        """
        Member stories of a profile in display order.

        SQL Generated:
            SELECT work_stories.* FROM work_stories
            JOIN profile_stories ON profile_stories.work_story_id = work_stories.id
            WHERE profile_stories.profile_id = '...'
            ORDER BY profile_stories.display_order
        """
        result = await self.session.execute(
            select(WorkStory)
            .join(ProfileStory, ProfileStory.work_story_id == WorkStory.id)
            .where(ProfileStory.profile_id == profile_id)
            .order_by(ProfileStory.display_order)
        )
        return list(result.scalars().all())

    async def list_story_ids(self, profile_id: UUID) -> List[UUID]:
        """Member story ids of a profile in display order."""
        result = await self.session.execute(
            select(ProfileStory.work_story_id)
            .where(ProfileStory.profile_id == profile_id)
            .order_by(ProfileStory.display_order)
        )
        return list(result.scalars().all())

    async def delete_for_profile(self, profile_id: UUID) -> None:
        """Remove every membership row of a profile."""
        await self.session.execute(
            delete(ProfileStory)
            .where(ProfileStory.profile_id == profile_id)
            .execution_options(synchronize_session="fetch")
        )

    async def insert_ordered(self, profile_id: UUID, story_ids: Sequence[UUID]) -> None:
        """Insert membership rows; display order is the list index."""
        self.session.add_all(
            [
                ProfileStory(profile_id=profile_id, work_story_id=story_id, display_order=index)
                for index, story_id in enumerate(story_ids)
            ]
        )
        await self.session.flush()

    async def replace(self, profile_id: UUID, story_ids: Sequence[UUID]) -> None:
        """
        Replace the whole membership list of a profile.

        Both steps run in the caller's transaction; nothing is visible to
        other sessions until the caller commits, so a concurrent reader
        sees either the old list or the new one.
        """
        await self.delete_for_profile(profile_id)
        await self.insert_ordered(profile_id, story_ids)

    async def delete_for_story(self, story_id: UUID) -> None:
        """Remove a story from every profile it belongs to."""
        await self.session.execute(
            delete(ProfileStory)
            .where(ProfileStory.work_story_id == story_id)
            .execution_options(synchronize_session="fetch")
        )
