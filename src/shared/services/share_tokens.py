"""
Share token allocation.

Profiles and share links are served from the same public route, so a new
token must be unused in both tables. The unique indexes remain the final
guard against a race between two allocations: a write that loses that race
is rolled back and retried once with a fresh token.
"""

import functools
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import StorageError
from src.shared.core.logging import get_logger
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.repositories.share_link_repository import ShareLinkRepository
from src.shared.utils.security import generate_share_token

logger = get_logger("share_tokens")

MAX_TOKEN_ATTEMPTS = 5

T = TypeVar("T")


async def allocate_share_token(session: AsyncSession) -> str:
    """
    Generate a share token no profile or share link uses yet.

    Raises:
        StorageError: Every attempt collided
    """
    profiles = ProfileRepository(session)
    links = ShareLinkRepository(session)

    for _ in range(MAX_TOKEN_ATTEMPTS):
        token = generate_share_token()
        if not await profiles.token_exists(token) and not await links.token_exists(token):
            return token

    logger.error("Could not allocate an unused share token", attempts=MAX_TOKEN_ATTEMPTS)
    raise StorageError("allocate_share_token")


def retry_on_token_conflict(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Run a token-writing service method again if its write hit a unique index.

    The wrapped method must do all of its work inside storage_errors, which
    has already rolled the session back by the time the StorageError arrives
    here. The second run reloads everything and allocates a new token.
    """

    @functools.wraps(method)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await method(*args, **kwargs)
        except StorageError as e:
            if not isinstance(e.__cause__, IntegrityError):
                raise
            logger.warning("Share token write conflicted, retrying", operation=method.__name__)
            return await method(*args, **kwargs)

    return wrapper
