"""
View Counter

Best-effort view counting for the public read path.

Each recorded view becomes a detached asyncio task with its own session:

    record() ──► asyncio.Task ──► wait_for(increment, timeout)
                     │
                     └── any failure: logged, swallowed

The read never waits for the task. The task is shielded so an aborted
request does not cancel it, and it is kept in `_tasks` until done so it is
not garbage-collected mid-flight. There is exactly one attempt; nothing
retries.
"""

import asyncio
from datetime import datetime
from typing import Optional, Set
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.shared.core.logging import get_logger
from src.shared.models.enums import ShareKind
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.repositories.share_link_repository import ShareLinkRepository

logger = get_logger("view_counter")


class ViewCounter:
    """
    Detached, time-bounded view count increments.

    Attributes:
        session_factory: Produces the task's own session
        timeout: Seconds before an increment is abandoned
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], timeout: float = 2.0) -> None:
        self.session_factory = session_factory
        self.timeout = timeout
        self._tasks: Set[asyncio.Task] = set()

    def record(self, kind: ShareKind, entity_id: UUID, viewed_at: datetime) -> Optional[asyncio.Task]:
        """
        Schedule one increment and return immediately.

        Returns:
            The scheduled task, or None when no event loop is running
        """
        try:
            task = asyncio.get_running_loop().create_task(
                self._run(kind, entity_id, viewed_at),
                name=f"view-count-{kind.value}-{entity_id}",
            )
        except RuntimeError as e:
            logger.warning("View count not scheduled", kind=kind.value, error=str(e))
            return None

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every outstanding increment (shutdown, tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, kind: ShareKind, entity_id: UUID, viewed_at: datetime) -> None:
        try:
            await asyncio.shield(
                asyncio.wait_for(self._increment(kind, entity_id, viewed_at), self.timeout)
            )
        except asyncio.TimeoutError:
            logger.warning("View count timed out", kind=kind.value, entity_id=str(entity_id))
        except asyncio.CancelledError:
            logger.warning("View count cancelled", kind=kind.value, entity_id=str(entity_id))
        except Exception as e:
            logger.warning(
                "View count failed",
                kind=kind.value,
                entity_id=str(entity_id),
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _increment(self, kind: ShareKind, entity_id: UUID, viewed_at: datetime) -> None:
        async with self.session_factory() as session:
            if kind is ShareKind.PROFILE:
                await ProfileRepository(session).increment_view(entity_id, viewed_at)
            else:
                await ShareLinkRepository(session).increment_view(entity_id, viewed_at)
            await session.commit()
