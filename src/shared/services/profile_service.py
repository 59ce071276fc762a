"""
Profile Service

Business logic for shareable profiles.

Every mutation runs the same pipeline:

    OwnershipGuard → validation → repository writes → one commit

Failures surface as exactly one of UnauthorizedError, ValidationError or
StorageError. Guard and validation run before the first write, and a
storage failure rolls the whole unit of work back, so a profile row is
never left without the memberships it was created with.

Usage:
======
    from src.shared.services.profile_service import ProfileService

    service = ProfileService(db)
    profile = await service.create_profile(principal, "Backend work", [story.id])
    await service.toggle_profile(profile.id, principal, False)
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.profile import Profile
from src.shared.repositories.profile_repository import (
    ProfileRepository,
    ProfileStoryRepository,
)
from src.shared.services.auth_service import Principal
from src.shared.services.ownership_guard import OwnershipGuard
from src.shared.services.share_tokens import allocate_share_token, retry_on_token_conflict
from src.shared.services.visibility import as_utc
from src.shared.utils.validation import (
    MAX_PROFILES_PER_USER,
    ensure_below_limit,
    validate_bio,
    validate_headline,
    validate_profile_name,
    validate_story_ids,
)

logger = get_logger("profiles")


def normalize_expiry(expires_at: Optional[datetime]) -> Optional[datetime]:
    return None if expires_at is None else as_utc(expires_at)


class ProfileService:
    """
    Service for profile-related business logic.

    Handles:
    - Owner reads (list, get)
    - Create / update / toggle / regenerate / delete
    - Atomic replacement of the ordered story list

    Attributes:
        session: Database session
        profile_repo: ProfileRepository instance
        membership_repo: ProfileStoryRepository instance
        guard: OwnershipGuard
    """

    def __init__(
        self,
        session: AsyncSession,
        membership_repo: Optional[ProfileStoryRepository] = None,
    ) -> None:
        """
        Initialize ProfileService.

        Args:
            session: Async database session
            membership_repo: Override for the membership repository
        """
        self.session = session
        self.profile_repo = ProfileRepository(session)
        self.membership_repo = membership_repo or ProfileStoryRepository(session)
        self.guard = OwnershipGuard(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_profiles(self, principal: Optional[Principal]) -> List[Profile]:
        """All of the owner's profiles with their stories, newest first."""
        user_id = self.guard.require_actor(principal)
        async with storage_errors("list_profiles", self.session, user_id=str(user_id)):
            return await self.profile_repo.list_for_user(user_id)

    async def get_profile(self, profile_id: Any, principal: Optional[Principal]) -> Profile:
        """
        Get one of the owner's profiles.

        Raises:
            ProfileNotFoundError: Missing, or owned by someone else
        """
        async with storage_errors("get_profile", self.session):
            return await self.guard.profile_for_read(profile_id, principal)

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    @retry_on_token_conflict
    async def create_profile(
        self,
        principal: Optional[Principal],
        name: Any,
        story_ids: Sequence[Any] = (),
        headline: Optional[str] = None,
        bio: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        owner_id: Any = None,
    ) -> Profile:
        """
        Create a profile with a fresh token and an ordered story list.

        Flow:
        1. Resolve actor, validate name / overrides / ids
        2. Check the owner is under the profile limit
        3. Check ownership of every story
        4. Insert profile (is_active=True) and membership rows, commit once

        Raises:
            UnauthorizedError: Actor mismatch or a story not owned by the actor
            ValidationError: Name, override or id list out of bounds
            StorageError: Backend failure (nothing is persisted)
        """
        user_id = self.guard.require_actor(principal, owner_id)
        clean_name = validate_profile_name(name)
        clean_headline = validate_headline(headline)
        clean_bio = validate_bio(bio)
        ids = validate_story_ids(story_ids)

        async with storage_errors("create_profile", self.session, user_id=str(user_id)):
            ensure_below_limit(
                "profiles",
                await self.profile_repo.count_for_user(user_id),
                MAX_PROFILES_PER_USER,
                "profiles",
            )
            await self.guard.require_stories(ids, principal)

            profile = await self.profile_repo.create(
                user_id=user_id,
                name=clean_name,
                headline=clean_headline,
                bio=clean_bio,
                share_token=await allocate_share_token(self.session),
                is_active=True,
                expires_at=normalize_expiry(expires_at),
            )
            await self.membership_repo.insert_ordered(profile.id, ids)
            await self.session.commit()

            created = await self.profile_repo.get_with_stories(profile.id)

        logger.info("Profile created", profile_id=str(profile.id), stories=len(ids))
        return created

    async def update_profile(
        self,
        profile_id: Any,
        principal: Optional[Principal],
        patch: Mapping[str, Any],
        owner_id: Any = None,
    ) -> Profile:
        """
        Apply a partial update.

        Only keys present in the patch are validated and written. headline,
        bio and expires_at may be set to None to clear them.

        Example:
            await service.update_profile(profile_id, principal, {"bio": None})
        """
        changes: dict[str, Any] = {}
        if "name" in patch:
            changes["name"] = validate_profile_name(patch["name"])
        if "headline" in patch:
            changes["headline"] = validate_headline(patch["headline"])
        if "bio" in patch:
            changes["bio"] = validate_bio(patch["bio"])
        if "expires_at" in patch:
            changes["expires_at"] = normalize_expiry(patch["expires_at"])

        async with storage_errors("update_profile", self.session):
            profile = await self.guard.require_profile(profile_id, principal, owner_id)
            await self.profile_repo.apply(profile, **changes)
            await self.session.commit()
            return await self.profile_repo.get_with_stories(profile.id)

    async def toggle_profile(
        self,
        profile_id: Any,
        principal: Optional[Principal],
        is_active: bool,
        owner_id: Any = None,
    ) -> Profile:
        """Set the active flag. Token and membership are left alone."""
        async with storage_errors("toggle_profile", self.session):
            profile = await self.guard.require_profile(profile_id, principal, owner_id)
            await self.profile_repo.apply(profile, is_active=bool(is_active))
            await self.session.commit()

        logger.info("Profile toggled", profile_id=str(profile.id), is_active=bool(is_active))
        return await self.get_profile(profile.id, principal)

    @retry_on_token_conflict
    async def regenerate_token(
        self,
        profile_id: Any,
        principal: Optional[Principal],
        owner_id: Any = None,
    ) -> Profile:
        """
        Issue a new share token and re-activate the profile.

        The old token stops resolving the moment this commits.
        """
        async with storage_errors("regenerate_token", self.session):
            profile = await self.guard.require_profile(profile_id, principal, owner_id)
            await self.profile_repo.apply(
                profile,
                share_token=await allocate_share_token(self.session),
                is_active=True,
            )
            await self.session.commit()

        logger.info("Profile token regenerated", profile_id=str(profile.id))
        return await self.get_profile(profile.id, principal)

    async def delete_profile(
        self,
        profile_id: Any,
        principal: Optional[Principal],
        owner_id: Any = None,
    ) -> None:
        """Delete a profile and its membership rows. Irreversible."""
        async with storage_errors("delete_profile", self.session):
            profile = await self.guard.require_profile(profile_id, principal, owner_id)
            self.session.expire(profile, ["memberships"])
            await self.membership_repo.delete_for_profile(profile.id)
            await self.session.delete(profile)
            await self.session.commit()

        logger.info("Profile deleted", profile_id=str(profile.id))

    async def update_profile_stories(
        self,
        profile_id: Any,
        principal: Optional[Principal],
        story_ids: Sequence[Any],
        owner_id: Any = None,
    ) -> Profile:
        """
        Replace the whole ordered story list of a profile.

        Display order is the list index. Ownership of the profile and of
        every story is checked first; a single foreign story rejects the
        call and leaves the current list untouched. Delete and insert are
        committed together, so readers see the old list or the new one.
        """
        ids = validate_story_ids(story_ids)

        async with storage_errors("update_profile_stories", self.session):
            profile = await self.guard.require_profile(profile_id, principal, owner_id)
            await self.guard.require_stories(ids, principal)

            self.session.expire(profile, ["memberships"])
            await self.membership_repo.replace(profile.id, ids)
            await self.profile_repo.apply(profile)
            await self.session.commit()

        logger.info("Profile stories replaced", profile_id=str(profile.id), stories=len(ids))
        return await self.get_profile(profile.id, principal)
