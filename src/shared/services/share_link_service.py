"""
Share Link Service

The legacy single link per user. It follows the same visibility rules as a
profile but has no story subset: it exposes every story the owner has.

Usage:
======
    service = ShareLinkService(db)
    link = await service.create_share_link(principal)
    link = await service.toggle_share_link(principal, False)
    link = await service.regenerate_share_link(principal)   # active again, new token
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import ConflictError
from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.share_link import ShareLink
from src.shared.repositories.share_link_repository import ShareLinkRepository
from src.shared.services.auth_service import Principal
from src.shared.services.ownership_guard import OwnershipGuard
from src.shared.services.share_tokens import allocate_share_token, retry_on_token_conflict
from src.shared.services.visibility import as_utc

logger = get_logger("share_links")


class ShareLinkService:
    """
    Service for the owner's legacy share link.

    Attributes:
        session: Database session
        repo: ShareLinkRepository instance
        guard: OwnershipGuard
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ShareLinkRepository(session)
        self.guard = OwnershipGuard(session)

    async def get_share_link(self, principal: Optional[Principal]) -> Optional[ShareLink]:
        """The owner's share link, or None if they never created one."""
        user_id = self.guard.require_actor(principal)
        async with storage_errors("get_share_link", self.session, user_id=str(user_id)):
            return await self.repo.get_for_user(user_id)

    @retry_on_token_conflict
    async def create_share_link(
        self,
        principal: Optional[Principal],
        expires_at: Optional[datetime] = None,
        owner_id: Any = None,
    ) -> ShareLink:
        """
        Create the owner's share link, active, with a fresh token.

        Raises:
            ConflictError: The owner already has one
        """
        user_id = self.guard.require_actor(principal, owner_id)

        async with storage_errors("create_share_link", self.session, user_id=str(user_id)):
            if await self.repo.get_for_user(user_id):
                raise ConflictError("Share link already exists")

            link = await self.repo.create(
                user_id=user_id,
                token=await allocate_share_token(self.session),
                is_active=True,
                expires_at=None if expires_at is None else as_utc(expires_at),
            )
            await self.session.commit()

        logger.info("Share link created", link_id=str(link.id))
        return link

    async def toggle_share_link(
        self,
        principal: Optional[Principal],
        is_active: bool,
        owner_id: Any = None,
    ) -> ShareLink:
        async with storage_errors("toggle_share_link", self.session):
            link = await self.guard.require_share_link(principal, owner_id)
            link = await self.repo.apply(link, is_active=bool(is_active))
            await self.session.commit()

        logger.info("Share link toggled", link_id=str(link.id), is_active=bool(is_active))
        return link

    @retry_on_token_conflict
    async def regenerate_share_link(
        self,
        principal: Optional[Principal],
        owner_id: Any = None,
    ) -> ShareLink:
        """New token, forced active. The old token is dead once this commits."""
        async with storage_errors("regenerate_share_link", self.session):
            link = await self.guard.require_share_link(principal, owner_id)
            link = await self.repo.apply(
                link,
                token=await allocate_share_token(self.session),
                is_active=True,
            )
            await self.session.commit()

        logger.info("Share link regenerated", link_id=str(link.id))
        return link
