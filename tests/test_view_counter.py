import asyncio
from datetime import datetime, timezone

from src.shared.models.enums import ShareKind
from src.shared.repositories.profile_repository import ProfileRepository
from src.shared.services.profile_service import ProfileService
from src.shared.services.view_counter import ViewCounter


async def test_increments_are_counted(session, database, owner_principal):
    profile = await ProfileService(session).create_profile(owner_principal, "Backend")
    counter = ViewCounter(database.session_factory)
    viewed_at = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    for _ in range(3):
        counter.record(ShareKind.PROFILE, profile.id, viewed_at)
    await counter.drain()

    async with database.session_factory() as reader:
        stored = await ProfileRepository(reader).get(profile.id)
    assert stored.view_count == 3
    assert stored.last_viewed_at is not None
    assert counter.pending == 0


async def test_failures_are_swallowed(database, owner_principal):
    def broken_factory():
        raise RuntimeError("database unavailable")

    counter = ViewCounter(broken_factory)
    task = counter.record(ShareKind.PROFILE, owner_principal.user_id, datetime.now(timezone.utc))

    await counter.drain()

    assert task.done()
    assert task.exception() is None


async def test_slow_increment_times_out(database, owner_principal):
    class SlowSession:
        async def __aenter__(self):
            await asyncio.sleep(5)

        async def __aexit__(self, *exc):
            return False

    counter = ViewCounter(lambda: SlowSession(), timeout=0.05)
    task = counter.record(ShareKind.SHARE_LINK, owner_principal.user_id, datetime.now(timezone.utc))

    await asyncio.wait_for(counter.drain(), timeout=2)

    assert task.exception() is None
