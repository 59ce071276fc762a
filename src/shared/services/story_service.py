"""
Story Service

Business logic for work stories.

Handles:
- Creating a story from a template (appended to the owner's list as a draft)
- Partial updates with bounds checks on title, responses, assets and video
- Deleting a story, its profile memberships and its blobs
- Owner listing and reordering

Usage:
======
    from src.shared.services.story_service import StoryService

    service = StoryService(db, blob_store)
    story = await service.create_story(principal, "project", "Billing rewrite")
    story = await service.update_story(story.id, principal, {"responses": {"problem": "..."}})
"""

from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.blob_store import BlobStore, BlobStoreError
from src.shared.core.exceptions import ValidationError
from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.enums import StoryStatus, TemplateType
from src.shared.models.work_story import WorkStory
from src.shared.repositories.profile_repository import ProfileStoryRepository
from src.shared.repositories.work_story_repository import WorkStoryRepository
from src.shared.services.asset_service import path_in_scope
from src.shared.services.auth_service import Principal
from src.shared.services.ownership_guard import OwnershipGuard
from src.shared.utils.validation import (
    MAX_STORIES_PER_USER,
    ensure_below_limit,
    validate_asset_count,
    validate_story_responses,
    validate_story_title,
    validate_uuid_list,
    validate_video_url,
)

logger = get_logger("stories")


def parse_template_type(value: Any) -> TemplateType:
    try:
        return TemplateType(value)
    except ValueError:
        raise ValidationError("template_type", f"Unknown template type: {value}")


def parse_status(value: Any) -> StoryStatus:
    try:
        return StoryStatus(value)
    except ValueError:
        raise ValidationError("status", f"Unknown story status: {value}")


class StoryService:
    """
    Service for work stories.

    Attributes:
        session: Database session
        repo: WorkStoryRepository instance
        membership_repo: ProfileStoryRepository instance
        guard: OwnershipGuard
        blob_store: Where story assets live (optional for callers that never delete)
    """

    def __init__(self, session: AsyncSession, blob_store: Optional[BlobStore] = None) -> None:
        self.session = session
        self.repo = WorkStoryRepository(session)
        self.membership_repo = ProfileStoryRepository(session)
        self.guard = OwnershipGuard(session)
        self.blob_store = blob_store

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_stories(self, principal: Optional[Principal]) -> List[WorkStory]:
        user_id = self.guard.require_actor(principal)
        async with storage_errors("list_stories", self.session, user_id=str(user_id)):
            return await self.repo.list_for_user(user_id)

    async def get_story(self, story_id: Any, principal: Optional[Principal]) -> WorkStory:
        async with storage_errors("get_story", self.session):
            return await self.guard.story_for_read(story_id, principal)

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_story(
        self,
        principal: Optional[Principal],
        template_type: Any,
        title: Any,
        owner_id: Any = None,
    ) -> WorkStory:
        """
        Create a draft story at the end of the owner's list.

        Raises:
            ValidationError: Bad title or template, or the 500-story limit reached
        """
        user_id = self.guard.require_actor(principal, owner_id)
        template = parse_template_type(template_type)
        clean_title = validate_story_title(title)

        async with storage_errors("create_story", self.session, user_id=str(user_id)):
            ensure_below_limit(
                "stories",
                await self.repo.count_for_user(user_id),
                MAX_STORIES_PER_USER,
                "stories",
            )
            story = await self.repo.create(
                user_id=user_id,
                template_type=template,
                title=clean_title,
                responses={},
                assets=[],
                status=StoryStatus.DRAFT,
                display_order=await self.repo.next_display_order(user_id),
            )
            await self.session.commit()

        logger.info("Story created", story_id=str(story.id), template=template.value)
        return story

    async def update_story(
        self,
        story_id: Any,
        principal: Optional[Principal],
        patch: Mapping[str, Any],
        owner_id: Any = None,
    ) -> WorkStory:
        """
        Apply a partial update to a story.

        Patchable keys: title, responses, status, video_url, assets.
        `assets` may only reorder or drop already attached assets (by id);
        new files go through the asset service. Blobs of dropped assets are
        removed after the commit.
        """
        changes: dict[str, Any] = {}
        if "title" in patch:
            changes["title"] = validate_story_title(patch["title"])
        if "responses" in patch:
            changes["responses"] = validate_story_responses(patch["responses"])
        if "status" in patch:
            changes["status"] = parse_status(patch["status"])
        if "video_url" in patch:
            changes["video_url"] = validate_video_url(patch["video_url"])

        dropped: List[dict[str, Any]] = []
        async with storage_errors("update_story", self.session):
            story = await self.guard.require_story(story_id, principal, owner_id)

            if "assets" in patch:
                changes["assets"], dropped = self._reorder_assets(story, patch["assets"])

            story = await self.repo.apply(story, **changes)
            await self.session.commit()

        await self._remove_blobs(story.user_id, story.id, dropped)
        return story

    async def delete_story(
        self,
        story_id: Any,
        principal: Optional[Principal],
        owner_id: Any = None,
    ) -> None:
        """Delete a story, drop it from every profile, then remove its blobs."""
        async with storage_errors("delete_story", self.session):
            story = await self.guard.require_story(story_id, principal, owner_id)
            assets = list(story.assets or [])
            owner, scope_id = story.user_id, story.id

            self.session.expire(story, ["profile_memberships"])
            await self.membership_repo.delete_for_story(story.id)
            await self.session.delete(story)
            await self.session.commit()

        logger.info("Story deleted", story_id=str(scope_id), assets=len(assets))
        await self._remove_blobs(owner, scope_id, assets)

    async def reorder_stories(
        self,
        principal: Optional[Principal],
        story_ids: Sequence[Any],
        owner_id: Any = None,
    ) -> List[WorkStory]:
        """
        Set display_order of the owner's stories to their index in story_ids.

        Every id must belong to the caller.
        """
        user_id = self.guard.require_actor(principal, owner_id)
        ids = validate_uuid_list(story_ids, MAX_STORIES_PER_USER)

        async with storage_errors("reorder_stories", self.session, user_id=str(user_id)):
            await self.guard.require_stories(ids, principal)
            stories = {story.id: story for story in await self.repo.get_by_ids(ids)}
            for index, story_id in enumerate(ids):
                stories[story_id].display_order = index
                stories[story_id].touch()
            await self.session.flush()
            await self.session.commit()

            return await self.repo.list_for_user(user_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _reorder_assets(story: WorkStory, requested: Any) -> tuple[list, list]:
        if not isinstance(requested, list):
            raise ValidationError("assets", "Assets must be a list")
        validate_asset_count(len(requested))

        current = {str(asset.get("id")): asset for asset in story.assets or []}
        ordered = []
        for item in requested:
            asset_id = str(item.get("id") if isinstance(item, Mapping) else item)
            if asset_id not in current:
                raise ValidationError("assets", "Unknown asset id")
            ordered.append(current.pop(asset_id))

        return ordered, list(current.values())

    async def _remove_blobs(
        self, owner_id: Any, story_id: Any, assets: List[dict[str, Any]]
    ) -> None:
        """Best-effort blob cleanup; the rows are already gone."""
        if not self.blob_store:
            return

        for asset in assets:
            path = asset.get("path")
            if not path:
                continue
            if not path_in_scope(path, owner_id, story_id):
                logger.warning(
                    "Skipping asset blob outside story scope",
                    story_id=str(story_id),
                    path=path,
                )
                continue
            try:
                await self.blob_store.remove(path)
            except BlobStoreError as e:
                logger.warning("Failed to remove asset blob", path=path, error=str(e))
