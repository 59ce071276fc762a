"""
Ownership Guard

Binds every mutation to the owner of the resource it touches.

Check Order:
============
    1. Session principal present             → else AuthenticationError (401)
    2. Claimed actor id == principal user id  → else UnauthorizedError
    3. Resource exists                        → else UnauthorizedError
    4. Resource owner == principal user id    → else UnauthorizedError

Steps 3 and 4 fail the same way so a mutation never reveals whether an id
exists. Owner-side reads use the *_for_read variants, which answer with
NotFoundError instead.

For membership writes every story id is checked; a single foreign or
missing story fails the whole list before anything is written.
"""

from typing import Any, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import (
    AuthenticationError,
    ProfileNotFoundError,
    StoryNotFoundError,
    UnauthorizedError,
)
from src.shared.core.logging import get_logger
from src.shared.models.profile import Profile
from src.shared.models.share_link import ShareLink
from src.shared.models.work_story import WorkStory
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.repositories.share_link_repository import ShareLinkRepository
from src.shared.repositories.work_story_repository import WorkStoryRepository
from src.shared.services.auth_service import Principal
from src.shared.utils.validation import validate_uuid

logger = get_logger("ownership")


class OwnershipGuard:
    """
    Application-level authorization for owner-only resources.

    Attributes:
        story_repo: WorkStoryRepository
        profile_repo: ProfileRepository
        share_link_repo: ShareLinkRepository
    """

    def __init__(self, session: AsyncSession) -> None:
        self.story_repo = WorkStoryRepository(session)
        self.profile_repo = ProfileRepository(session)
        self.share_link_repo = ShareLinkRepository(session)

    @staticmethod
    def require_actor(principal: Optional[Principal], claimed_user_id: Any = None) -> UUID:
        """
        Resolve the acting user id from the session.

        Args:
            principal: Session principal (None when signed out)
            claimed_user_id: User id the client says it acts as, if any

        Returns:
            The principal's user id

        Raises:
            AuthenticationError: No session
            UnauthorizedError: Claimed id differs from the session
        """
        if principal is None:
            raise AuthenticationError()

        if claimed_user_id is not None and str(claimed_user_id) != str(principal.user_id):
            logger.warning(
                "Actor mismatch",
                principal=str(principal.user_id),
                claimed=str(claimed_user_id),
            )
            raise UnauthorizedError()

        return principal.user_id

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATION GUARDS
    # ═══════════════════════════════════════════════════════════════════════════

    async def require_story(
        self, story_id: Any, principal: Optional[Principal], claimed_user_id: Any = None
    ) -> WorkStory:
        user_id = self.require_actor(principal, claimed_user_id)
        story = await self.story_repo.get(validate_uuid(story_id, "story_id"))
        if story is None or story.user_id != user_id:
            raise UnauthorizedError()
        return story

    async def require_profile(
        self, profile_id: Any, principal: Optional[Principal], claimed_user_id: Any = None
    ) -> Profile:
        user_id = self.require_actor(principal, claimed_user_id)
        profile = await self.profile_repo.get(validate_uuid(profile_id, "profile_id"))
        if profile is None or profile.user_id != user_id:
            raise UnauthorizedError()
        return profile

    async def require_share_link(
        self, principal: Optional[Principal], claimed_user_id: Any = None
    ) -> ShareLink:
        user_id = self.require_actor(principal, claimed_user_id)
        link = await self.share_link_repo.get_for_user(user_id)
        if link is None:
            raise UnauthorizedError()
        return link

    async def require_stories(self, story_ids: Iterable[UUID], principal: Principal) -> List[UUID]:
        """
        Require ownership of every story in the list.

        Returns:
            The ids, in the order given
        """
        ids = list(story_ids)
        owned = await self.story_repo.owned_ids(principal.user_id, ids)
        if len(owned) != len(set(ids)):
            logger.warning(
                "Membership rejected: foreign or missing stories",
                user_id=str(principal.user_id),
                requested=len(ids),
                owned=len(owned),
            )
            raise UnauthorizedError()
        return ids

    # ═══════════════════════════════════════════════════════════════════════════
    # OWNER READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def story_for_read(self, story_id: Any, principal: Optional[Principal]) -> WorkStory:
        user_id = self.require_actor(principal)
        story_uuid = validate_uuid(story_id, "story_id")
        story = await self.story_repo.get(story_uuid)
        if story is None or story.user_id != user_id:
            raise StoryNotFoundError(str(story_uuid))
        return story

    async def profile_for_read(self, profile_id: Any, principal: Optional[Principal]) -> Profile:
        user_id = self.require_actor(principal)
        profile_uuid = validate_uuid(profile_id, "profile_id")
        profile = await self.profile_repo.get_with_stories(profile_uuid)
        if profile is None or profile.user_id != user_id:
            raise ProfileNotFoundError(str(profile_uuid))
        return profile
