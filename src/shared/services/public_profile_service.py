"""
Public Profile Service

Resolves a share token to the sanitized public view.

Resolution:
===========
    1. Format check (16 chars, token alphabet)   ─┐
    2. Exact token lookup: profiles, share_links  ├─► PublicProfileNotFoundError
    3. Visibility check against one `now`        ─┘   (one shape for every miss)
    4. Build PublicProfileView from allow-listed fields
    5. Schedule the view count increment; never wait for it

A malformed token returns before any query is issued. Unknown, inactive
and expired tokens all raise the same argument-less exception, so callers
cannot tell them apart.
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import PublicProfileNotFoundError
from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.enums import ShareKind
from src.shared.models.user import User
from src.shared.models.work_story import WorkStory
from src.shared.repositories.profile_repository import (
    ProfileRepository,
    ProfileStoryRepository,
)
from src.shared.repositories.share_link_repository import ShareLinkRepository
from src.shared.repositories.user_repository import UserRepository
from src.shared.repositories.work_story_repository import WorkStoryRepository
from src.shared.schemas.public import PublicAsset, PublicProfileView, PublicStory
from src.shared.services.view_counter import ViewCounter
from src.shared.services.visibility import is_publicly_visible, request_now
from src.shared.utils.security import SecurityUtils
from src.shared.utils.validation import youtube_embed_url

logger = get_logger("public_profiles")


def project_story(story: WorkStory) -> PublicStory:
    return PublicStory(
        title=story.title,
        template_type=story.template_type,
        responses=dict(story.responses or {}),
        assets=[PublicAsset.model_validate(asset) for asset in story.assets or []],
        video_url=story.video_url,
        video_embed_url=youtube_embed_url(story.video_url),
    )


def project_view(
    user: User,
    stories: Sequence[WorkStory],
    title: Optional[str] = None,
    headline: Optional[str] = None,
    bio: Optional[str] = None,
) -> PublicProfileView:
    """Assemble the public view; profile overrides fall back to the user's own."""
    return PublicProfileView(
        name=user.name,
        headline=headline or user.headline,
        bio=bio or user.bio,
        profile_photo_url=user.profile_photo_url,
        title=title,
        stories=[project_story(story) for story in stories],
    )


class PublicProfileService:
    """
    Unauthenticated read path for share tokens.

    Attributes:
        session: Database session
        view_counter: Records views after a successful read (optional)
    """

    def __init__(self, session: AsyncSession, view_counter: Optional[ViewCounter] = None) -> None:
        self.session = session
        self.view_counter = view_counter
        self.profile_repo = ProfileRepository(session)
        self.membership_repo = ProfileStoryRepository(session)
        self.share_link_repo = ShareLinkRepository(session)
        self.user_repo = UserRepository(session)
        self.story_repo = WorkStoryRepository(session)

    async def resolve_public_profile(
        self,
        token: str,
        now: Optional[datetime] = None,
    ) -> PublicProfileView:
        """
        Resolve a token to its public view.

        Args:
            token: Token from the URL path
            now: Request timestamp; read once here when not supplied

        Returns:
            PublicProfileView

        Raises:
            PublicProfileNotFoundError: Malformed, unknown, inactive or expired
            StorageError: Backend failure
        """
        now = now or request_now()

        if not SecurityUtils.is_valid_token_format(token):
            raise PublicProfileNotFoundError()

        async with storage_errors("resolve_public_profile", self.session):
            # Both tables are read for every token so a miss costs the same
            # queries whether the row is absent, inactive or expired.
            profile = await self.profile_repo.get_by_token(token)
            link = await self.share_link_repo.get_by_token(token)

            if profile is not None:
                if not is_publicly_visible(profile, now):
                    raise PublicProfileNotFoundError()

                user = await self.user_repo.get(profile.user_id)
                if user is None:
                    raise PublicProfileNotFoundError()
                stories = await self.membership_repo.list_stories(profile.id)
                view = project_view(
                    user,
                    stories,
                    title=profile.name,
                    headline=profile.headline,
                    bio=profile.bio,
                )
                self._record_view(ShareKind.PROFILE, profile.id, now)
                return view

            if link is None or not is_publicly_visible(link, now):
                raise PublicProfileNotFoundError()

            user = await self.user_repo.get(link.user_id)
            if user is None:
                raise PublicProfileNotFoundError()
            stories = await self.story_repo.list_for_user(link.user_id)
            view = project_view(user, stories)
            self._record_view(ShareKind.SHARE_LINK, link.id, now)
            return view

    def _record_view(self, kind: ShareKind, entity_id, viewed_at: datetime) -> None:
        if self.view_counter is not None:
            self.view_counter.record(kind, entity_id, viewed_at)
