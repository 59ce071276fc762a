"""
WorkStory Repository

Database operations for owner-authored work stories.

Common Operations:
==================
- list_for_user()      → Owner's stories ordered by display_order
- owned_ids()          → Which of the given ids belong to a user
- next_display_order() → max(display_order) + 1 for a user
- count_for_user()     → Number of stories a user owns
"""

from typing import Iterable, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.work_story import WorkStory


class WorkStoryRepository(BaseRepository[WorkStory]):
    """Repository for WorkStory database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(WorkStory, session)

    async def list_for_user(self, user_id: UUID) -> List[WorkStory]:
        """
        Get all stories for a user in display order.

        Args:
            user_id: Owner's UUID

        Returns:
            List of WorkStory ordered by display_order, then creation time
        """
        result = await self.session.execute(
            select(WorkStory)
            .where(WorkStory.user_id == user_id)
            .order_by(WorkStory.display_order, WorkStory.created_at)
        )
        return list(result.scalars().all())

    async def owned_ids(self, user_id: UUID, story_ids: Iterable[UUID]) -> set[UUID]:
        """
        Return the subset of story_ids that belong to user_id.

        Used by the ownership guard to reject membership lists that contain
        anybody else's story.

        SQL Generated:
            SELECT id FROM work_stories WHERE user_id = '...' AND id IN (...)
        """
        ids = list(story_ids)
        if not ids:
            return set()

        result = await self.session.execute(
            select(WorkStory.id).where(
                WorkStory.user_id == user_id,
                WorkStory.id.in_(ids),
            )
        )
        return set(result.scalars().all())

    async def next_display_order(self, user_id: UUID) -> int:
        """Display order for a newly created story (appended last)."""
        result = await self.session.execute(
            select(func.max(WorkStory.display_order)).where(WorkStory.user_id == user_id)
        )
        current = result.scalar()
        return 0 if current is None else current + 1

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of stories owned by a user."""
        return await self.count(filters={"user_id": user_id})
