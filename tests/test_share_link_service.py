import pytest

from src.shared.core.exceptions import ConflictError, PublicProfileNotFoundError, UnauthorizedError
from src.shared.repositories.share_link_repository import ShareLinkRepository
from src.shared.services import share_tokens
from src.shared.services.public_profile_service import PublicProfileService
from src.shared.services.share_link_service import ShareLinkService
from src.shared.utils.security import SecurityUtils


async def test_get_returns_none_before_creation(session, owner_principal):
    assert await ShareLinkService(session).get_share_link(owner_principal) is None


async def test_create_is_active_with_fresh_token(session, owner_principal):
    link = await ShareLinkService(session).create_share_link(owner_principal)

    assert link.is_active is True
    assert link.user_id == owner_principal.user_id
    assert SecurityUtils.is_valid_token_format(link.token)


async def test_second_link_conflicts(session, owner_principal):
    service = ShareLinkService(session)
    await service.create_share_link(owner_principal)

    with pytest.raises(ConflictError):
        await service.create_share_link(owner_principal)


async def test_toggle_requires_existing_link(session, owner_principal):
    with pytest.raises(UnauthorizedError):
        await ShareLinkService(session).toggle_share_link(owner_principal, False)


async def test_toggle_keeps_token(session, owner_principal):
    service = ShareLinkService(session)
    link = await service.create_share_link(owner_principal)
    token = link.token

    toggled = await service.toggle_share_link(owner_principal, False)

    assert toggled.is_active is False
    assert toggled.token == token


async def test_regenerate_reactivates_and_invalidates_old_token(
    session, database, make_story, owner, owner_principal
):
    await make_story(owner)
    service = ShareLinkService(session)
    link = await service.create_share_link(owner_principal)
    old_token = link.token
    await service.toggle_share_link(owner_principal, False)

    regenerated = await service.regenerate_share_link(owner_principal)

    assert regenerated.token != old_token
    assert regenerated.is_active is True
    async with database.session_factory() as reader:
        public = PublicProfileService(reader)
        with pytest.raises(PublicProfileNotFoundError):
            await public.resolve_public_profile(old_token)
        view = await public.resolve_public_profile(regenerated.token)
    assert len(view.stories) == 1


async def test_claimed_owner_mismatch(session, owner_principal, stranger):
    with pytest.raises(UnauthorizedError):
        await ShareLinkService(session).create_share_link(owner_principal, owner_id=stranger.id)


async def test_regenerate_retries_when_the_new_token_was_just_taken(
    session, owner_principal, stranger_principal, monkeypatch
):
    service = ShareLinkService(session)
    taken = (await service.create_share_link(stranger_principal)).token
    await service.create_share_link(owner_principal)
    tokens = iter([taken, "Fresh23456789abc"])

    async def unseen(self, token):
        return False

    monkeypatch.setattr(share_tokens, "generate_share_token", lambda: next(tokens))
    monkeypatch.setattr(ShareLinkRepository, "token_exists", unseen)

    regenerated = await service.regenerate_share_link(owner_principal)

    assert regenerated.token == "Fresh23456789abc"
    assert regenerated.is_active is True
