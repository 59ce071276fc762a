import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.shared.core.exceptions import (
    AuthenticationError,
    ProfileNotFoundError,
    PublicProfileNotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from src.shared.models.profile import Profile
from src.shared.repositories.profile_repository import ProfileRepository, ProfileStoryRepository
from src.shared.services import share_tokens
from src.shared.services.profile_service import ProfileService
from src.shared.services.public_profile_service import PublicProfileService
from src.shared.utils.security import SecurityUtils
from src.shared.utils.validation import MAX_PROFILES_PER_USER


async def _membership(database, profile_id):
    async with database.session_factory() as reader:
        return await ProfileStoryRepository(reader).list_story_ids(profile_id)


async def _profile_count(database, user_id):
    async with database.session_factory() as reader:
        return await ProfileRepository(reader).count_for_user(user_id)


class TestCreateProfile:
    async def test_creates_active_profile_with_ordered_stories(
        self, session, make_story, owner, owner_principal
    ):
        first = await make_story(owner, title="First")
        second = await make_story(owner, title="Second")

        profile = await ProfileService(session).create_profile(
            owner_principal, "Backend work", [str(second.id), str(first.id)]
        )

        assert profile.is_active is True
        assert profile.expires_at is None
        assert profile.view_count == 0
        assert SecurityUtils.is_valid_token_format(profile.share_token)
        assert [m.work_story_id for m in profile.memberships] == [second.id, first.id]
        assert [m.display_order for m in profile.memberships] == [0, 1]

    async def test_blank_overrides_are_stored_as_null(self, session, owner_principal):
        profile = await ProfileService(session).create_profile(
            owner_principal, "Backend work", headline="   ", bio=""
        )
        assert profile.headline is None
        assert profile.bio is None

    async def test_foreign_story_creates_nothing(
        self, session, database, make_story, stranger, owner, owner_principal
    ):
        foreign = await make_story(stranger)

        with pytest.raises(UnauthorizedError):
            await ProfileService(session).create_profile(owner_principal, "Mine", [foreign.id])

        assert await _profile_count(database, owner.id) == 0

    async def test_claimed_owner_must_match_session(self, session, owner_principal, stranger):
        with pytest.raises(UnauthorizedError):
            await ProfileService(session).create_profile(
                owner_principal, "Mine", owner_id=str(stranger.id)
            )

    async def test_signed_out_caller_is_rejected(self, session):
        with pytest.raises(AuthenticationError):
            await ProfileService(session).create_profile(None, "Mine")

    async def test_invalid_name_is_rejected_before_any_write(
        self, session, database, owner, owner_principal
    ):
        with pytest.raises(ValidationError):
            await ProfileService(session).create_profile(owner_principal, " " * 5)
        assert await _profile_count(database, owner.id) == 0

    async def test_profile_limit(self, session, owner, owner_principal):
        for index in range(MAX_PROFILES_PER_USER):
            session.add(Profile(user_id=owner.id, name=f"P{index}", share_token=f"{index:0>16}"))
        await session.commit()

        with pytest.raises(ValidationError):
            await ProfileService(session).create_profile(owner_principal, "One too many")

    async def test_failed_membership_insert_rolls_back_profile(
        self, session, database, make_story, owner, owner_principal
    ):
        story = await make_story(owner)
        owner_id = owner.id

        class FailingMemberships(ProfileStoryRepository):
            async def insert_ordered(self, profile_id, story_ids):
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        service = ProfileService(session, membership_repo=FailingMemberships(session))
        with pytest.raises(StorageError):
            await service.create_profile(owner_principal, "Broken", [story.id])

        assert await _profile_count(database, owner_id) == 0

    async def test_token_race_is_retried_with_a_fresh_token(
        self, session, owner_principal, monkeypatch
    ):
        service = ProfileService(session)
        taken = (await service.create_profile(owner_principal, "First")).share_token
        tokens = iter([taken, "Fresh23456789abc"])

        async def unseen(self, token):
            return False

        monkeypatch.setattr(share_tokens, "generate_share_token", lambda: next(tokens))
        monkeypatch.setattr(ProfileRepository, "token_exists", unseen)

        profile = await service.create_profile(owner_principal, "Second")

        assert profile.share_token == "Fresh23456789abc"
        assert profile.name == "Second"


class TestToggleAndRegenerate:
    async def test_toggle_is_idempotent(self, session, make_story, owner, owner_principal):
        story = await make_story(owner)
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [story.id])
        token = profile.share_token

        once = await service.toggle_profile(profile.id, owner_principal, False)
        twice = await service.toggle_profile(profile.id, owner_principal, False)

        assert once.is_active is False
        assert twice.is_active is False
        assert twice.share_token == token
        assert [m.work_story_id for m in twice.memberships] == [story.id]

    async def test_stranger_cannot_toggle(self, session, owner_principal, stranger_principal):
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend")

        with pytest.raises(UnauthorizedError):
            await service.toggle_profile(profile.id, stranger_principal, False)
        with pytest.raises(UnauthorizedError):
            await service.toggle_profile(uuid4(), stranger_principal, False)

    async def test_regenerate_kills_old_token_and_reactivates(
        self, session, database, owner_principal
    ):
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend")
        old_token = profile.share_token
        await service.toggle_profile(profile.id, owner_principal, False)

        regenerated = await service.regenerate_token(profile.id, owner_principal)

        assert regenerated.share_token != old_token
        assert regenerated.is_active is True
        async with database.session_factory() as reader:
            public = PublicProfileService(reader)
            with pytest.raises(PublicProfileNotFoundError):
                await public.resolve_public_profile(old_token)
            view = await public.resolve_public_profile(regenerated.share_token)
        assert view.title == "Backend"


class TestUpdateAndDelete:
    async def test_partial_update_clears_and_sets(self, session, owner_principal):
        service = ProfileService(session)
        profile = await service.create_profile(
            owner_principal, "Backend", headline="Platform", bio="Long bio"
        )
        expires = datetime.now(timezone.utc) + timedelta(days=7)

        updated = await service.update_profile(
            profile.id, owner_principal, {"bio": None, "expires_at": expires}
        )

        assert updated.name == "Backend"
        assert updated.headline == "Platform"
        assert updated.bio is None
        assert updated.expires_at is not None

    async def test_delete_removes_profile_and_memberships(
        self, session, database, make_story, owner, owner_principal
    ):
        story = await make_story(owner)
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [story.id])

        await service.delete_profile(profile.id, owner_principal)

        assert await _membership(database, profile.id) == []
        with pytest.raises(ProfileNotFoundError):
            await service.get_profile(profile.id, owner_principal)

    async def test_owner_read_of_foreign_profile_is_not_found(
        self, session, owner_principal, stranger_principal
    ):
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend")

        with pytest.raises(ProfileNotFoundError):
            await service.get_profile(profile.id, stranger_principal)
        assert [p.id for p in await service.list_profiles(stranger_principal)] == []


class TestUpdateProfileStories:
    async def test_replaces_list_in_given_order(self, session, make_story, owner, owner_principal):
        a = await make_story(owner, title="A")
        b = await make_story(owner, title="B")
        c = await make_story(owner, title="C")
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [a.id, b.id])

        updated = await service.update_profile_stories(
            profile.id, owner_principal, [str(c.id), str(a.id)]
        )

        assert [m.work_story_id for m in updated.memberships] == [c.id, a.id]
        assert [m.display_order for m in updated.memberships] == [0, 1]

    async def test_empty_list_clears_membership(self, session, make_story, owner, owner_principal):
        story = await make_story(owner)
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [story.id])

        updated = await service.update_profile_stories(profile.id, owner_principal, [])

        assert updated.memberships == []

    async def test_foreign_story_leaves_membership_unchanged(
        self, session, database, make_story, owner, stranger, owner_principal
    ):
        mine = await make_story(owner)
        theirs = await make_story(stranger)
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [mine.id])

        with pytest.raises(UnauthorizedError):
            await service.update_profile_stories(profile.id, owner_principal, [mine.id, theirs.id])

        assert await _membership(database, profile.id) == [mine.id]

    async def test_concurrent_reader_sees_old_or_new_list(
        self, session, database, make_story, owner, owner_principal
    ):
        a = await make_story(owner, title="A")
        b = await make_story(owner, title="B")
        service = ProfileService(session)
        profile = await service.create_profile(owner_principal, "Backend", [a.id])

        deleted = asyncio.Event()
        resume = asyncio.Event()

        class PausingMemberships(ProfileStoryRepository):
            async def replace(self, profile_id, story_ids):
                await self.delete_for_profile(profile_id)
                deleted.set()
                await resume.wait()
                await self.insert_ordered(profile_id, story_ids)

        async with database.session_factory() as writer_session:
            writer = ProfileService(writer_session, membership_repo=PausingMemberships(writer_session))
            update = asyncio.create_task(
                writer.update_profile_stories(profile.id, owner_principal, [b.id, a.id])
            )

            await asyncio.wait_for(deleted.wait(), timeout=5)
            during = await _membership(database, profile.id)
            resume.set()
            await asyncio.wait_for(update, timeout=20)

        after = await _membership(database, profile.id)

        assert during == [a.id]
        assert after == [b.id, a.id]
