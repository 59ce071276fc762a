"""
ShareLink Repository

Database operations for the legacy single share link.

Common Operations:
==================
- get_for_user()     → The user's share link, if any
- get_by_token()     → Exact token lookup (public read path)
- token_exists()     → Collision check for freshly generated tokens
- increment_view()   → Atomic view_count + 1
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy import update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.share_link import ShareLink


class ShareLinkRepository(BaseRepository[ShareLink]):
    """Repository for ShareLink database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ShareLink, session)

    async def get_for_user(self, user_id: UUID) -> Optional[ShareLink]:
        """Get the share link owned by a user."""
        result = await self.session.execute(select(ShareLink).where(ShareLink.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Optional[ShareLink]:
        """Get a share link by exact token match."""
        result = await self.session.execute(select(ShareLink).where(ShareLink.token == token))
        return result.scalar_one_or_none()

    async def token_exists(self, token: str) -> bool:
        """Check whether any share link already uses this token."""
        return await self.get_by_token(token) is not None

    async def increment_view(self, link_id: UUID, viewed_at: datetime) -> None:
        """Atomically increment the view counter."""
        await self.session.execute(
            sql_update(ShareLink)
            .where(ShareLink.id == link_id)
            .values(view_count=ShareLink.view_count + 1, last_viewed_at=viewed_at)
            .execution_options(synchronize_session=False)
        )
