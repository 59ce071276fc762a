from uuid import uuid4

import pytest

from src.shared.core.exceptions import (
    AuthenticationError,
    ProfileNotFoundError,
    StoryNotFoundError,
    UnauthorizedError,
)
from src.shared.services.ownership_guard import OwnershipGuard


def test_missing_principal_is_authentication_error():
    with pytest.raises(AuthenticationError) as exc:
        OwnershipGuard.require_actor(None)
    assert exc.value.status_code == 401


def test_claimed_actor_must_match_session(owner_principal, stranger):
    assert OwnershipGuard.require_actor(owner_principal) == owner_principal.user_id
    assert OwnershipGuard.require_actor(owner_principal, str(owner_principal.user_id))

    with pytest.raises(UnauthorizedError) as exc:
        OwnershipGuard.require_actor(owner_principal, str(stranger.id))
    assert exc.value.status_code == 403


async def test_foreign_and_missing_story_fail_the_same_way(
    session, make_story, owner, stranger_principal
):
    story = await make_story(owner)
    guard = OwnershipGuard(session)

    with pytest.raises(UnauthorizedError) as foreign:
        await guard.require_story(story.id, stranger_principal)
    with pytest.raises(UnauthorizedError) as missing:
        await guard.require_story(uuid4(), stranger_principal)

    assert foreign.value.to_dict() == missing.value.to_dict()


async def test_owner_passes_story_guard(session, make_story, owner, owner_principal):
    story = await make_story(owner)
    guarded = await OwnershipGuard(session).require_story(story.id, owner_principal)
    assert guarded.id == story.id


async def test_require_stories_rejects_one_foreign_story(
    session, make_story, owner, stranger, owner_principal
):
    mine = await make_story(owner, title="Mine")
    theirs = await make_story(stranger, title="Theirs")
    guard = OwnershipGuard(session)

    assert await guard.require_stories([mine.id], owner_principal) == [mine.id]
    with pytest.raises(UnauthorizedError):
        await guard.require_stories([mine.id, theirs.id], owner_principal)


async def test_owner_reads_answer_not_found(session, make_story, owner, stranger_principal):
    story = await make_story(owner)
    guard = OwnershipGuard(session)

    with pytest.raises(StoryNotFoundError):
        await guard.story_for_read(story.id, stranger_principal)
    with pytest.raises(ProfileNotFoundError):
        await guard.profile_for_read(uuid4(), stranger_principal)


async def test_share_link_guard_without_link(session, owner_principal):
    with pytest.raises(UnauthorizedError):
        await OwnershipGuard(session).require_share_link(owner_principal)
