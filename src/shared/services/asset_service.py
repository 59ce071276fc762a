"""
Asset Service

Upload and removal of files attached to a work story.

Blob Paths:
===========
    {owner_id}/{story_id}/{epoch_millis}-{sanitized_name}

    e.g. 660e8400-.../550e8400-.../1717171717171-architecture_v2.png

Removal only proceeds when the stored path lives under the caller's own
{owner_id}/{story_id}/ scope.

Asset Record (stored inline on the story):
==========================================
    {
        "id": "7c9e6679-...",
        "name": "architecture v2.png",
        "type": "image",
        "size": 183204,
        "url": "https://.../660e8400-.../550e8400-.../1717171717171-architecture_v2.png",
        "path": "660e8400-.../550e8400-.../1717171717171-architecture_v2.png",
        "mime_type": "image/png"
    }
"""

import re
import time
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.blob_store import BlobStore, BlobStoreError
from src.shared.core.exceptions import StorageError, UnauthorizedError, ValidationError
from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.enums import AssetType
from src.shared.repositories.work_story_repository import WorkStoryRepository
from src.shared.services.auth_service import Principal
from src.shared.services.ownership_guard import OwnershipGuard
from src.shared.utils.validation import MAX_ASSETS_PER_STORY, sanitize_text_input

logger = get_logger("assets")

ALLOWED_MIME_TYPES: dict[str, AssetType] = {
    "image/jpeg": AssetType.IMAGE,
    "image/png": AssetType.IMAGE,
    "image/gif": AssetType.IMAGE,
    "image/webp": AssetType.IMAGE,
    "video/mp4": AssetType.VIDEO,
    "video/webm": AssetType.VIDEO,
    "video/quicktime": AssetType.VIDEO,
    "application/pdf": AssetType.PDF,
}

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def asset_type_for(mime_type: str) -> Optional[AssetType]:
    return ALLOWED_MIME_TYPES.get(mime_type)


def story_scope(owner_id: Any, story_id: Any) -> str:
    return f"{owner_id}/{story_id}/"


def build_asset_path(owner_id: Any, story_id: Any, filename: str) -> str:
    sanitized = _UNSAFE_NAME_CHARS.sub("_", filename)
    return f"{story_scope(owner_id, story_id)}{int(time.time() * 1000)}-{sanitized}"


def path_in_scope(path: str, owner_id: Any, story_id: Any) -> bool:
    return path.startswith(story_scope(owner_id, story_id)) and ".." not in path.split("/")


class AssetService:
    """
    Service for story assets.

    Attributes:
        session: Database session
        repo: WorkStoryRepository instance
        guard: OwnershipGuard
        blob_store: Backend holding the files
        max_bytes: Largest accepted upload
    """

    def __init__(
        self,
        session: AsyncSession,
        blob_store: BlobStore,
        max_bytes: Optional[int] = None,
    ) -> None:
        self.session = session
        self.repo = WorkStoryRepository(session)
        self.guard = OwnershipGuard(session)
        self.blob_store = blob_store
        self.max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES

    async def upload_asset(
        self,
        story_id: Any,
        principal: Optional[Principal],
        filename: str,
        content_type: str,
        data: bytes,
    ) -> dict[str, Any]:
        """
        Store a file and attach it to the story.

        Flow:
        1. Guard story ownership
        2. Check MIME type, size and the 50-asset cap
        3. Put the blob, then append the asset record and commit

        If the commit fails the blob is removed again.

        Raises:
            UnauthorizedError: Not the story owner
            ValidationError: Unsupported type, too large, or too many assets
            StorageError: Blob store or database failure
        """
        asset_type = asset_type_for(content_type)
        if asset_type is None:
            raise ValidationError(
                "file",
                f'File type "{content_type}" is not supported. Please upload an image, video, or PDF.',
            )
        if len(data) > self.max_bytes:
            raise ValidationError(
                "file", f"File is too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB."
            )

        async with storage_errors("upload_asset", self.session):
            story = await self.guard.require_story(story_id, principal)
            if len(story.assets or []) >= MAX_ASSETS_PER_STORY:
                raise ValidationError(
                    "assets", f"Too many assets. Maximum {MAX_ASSETS_PER_STORY} allowed."
                )

            path = build_asset_path(story.user_id, story.id, filename)
            try:
                url = await self.blob_store.put(path, data, content_type)
            except BlobStoreError as e:
                logger.error("Blob upload failed", path=path, error=str(e), exc_info=True)
                raise StorageError("upload_asset") from e

            asset = {
                "id": str(uuid4()),
                "name": sanitize_text_input(filename),
                "type": asset_type.value,
                "size": len(data),
                "url": url,
                "path": path,
                "mime_type": content_type,
            }

            try:
                await self.repo.apply(story, assets=[*(story.assets or []), asset])
                await self.session.commit()
            except Exception:
                await self._discard_blob(path)
                raise

        logger.info("Asset uploaded", story_id=str(story.id), asset_id=asset["id"], size=len(data))
        return asset

    async def remove_asset(
        self,
        story_id: Any,
        principal: Optional[Principal],
        asset_id: str,
    ) -> None:
        """
        Detach an asset from the story, then delete its blob.

        The blob goes only after the record update commits; a failed
        removal leaves an orphaned file, never a dangling asset.

        Raises:
            UnauthorizedError: Not the story owner, or the stored path is
                outside the owner's story scope
            ValidationError: No such asset on the story
        """
        async with storage_errors("remove_asset", self.session):
            story = await self.guard.require_story(story_id, principal)

            assets = list(story.assets or [])
            asset = next((item for item in assets if str(item.get("id")) == str(asset_id)), None)
            if asset is None:
                raise ValidationError("asset_id", "Asset not found on this story")

            path = asset.get("path") or ""
            if not path_in_scope(path, principal.user_id, story.id):
                logger.warning("Asset path outside caller scope", story_id=str(story.id), path=path)
                raise UnauthorizedError()

            await self.repo.apply(story, assets=[item for item in assets if item is not asset])
            await self.session.commit()

        logger.info("Asset removed", story_id=str(story.id), asset_id=str(asset_id))
        await self._discard_blob(path)

    async def _discard_blob(self, path: str) -> None:
        try:
            await self.blob_store.remove(path)
        except BlobStoreError as e:
            logger.warning("Failed to discard orphaned blob", path=path, error=str(e))
