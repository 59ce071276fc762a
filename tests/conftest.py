"""
Shared test fixtures.

Every test gets its own SQLite file under tmp_path, so sessions opened by
the view counter or a concurrent reader see the same data as the test.
"""

from typing import AsyncIterator, Callable, Optional
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import create_application
from src.config.settings import Settings
from src.shared.adapters.blob_store import LocalBlobStore
from src.shared.db.session import Database
from src.shared.models.enums import StoryStatus, TemplateType
from src.shared.models.user import User
from src.shared.models.work_story import WorkStory
from src.shared.services.auth_service import MockIdentityProvider, Principal


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        APP_ENV="test",
        AUTH_BACKEND="mock",
        SECRET_KEY="test-secret-key",
        PUBLIC_PROFILE_PREFIX="/p",
        BLOB_STORE_BACKEND="local",
        BLOB_STORE_ROOT=str(tmp_path / "blobs"),
        BLOB_STORE_PUBLIC_URL="http://assets.test",
        VIEW_COUNT_TIMEOUT_SECONDS=2.0,
    )


@pytest.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'level2.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
async def session(database):
    async with database.session_factory() as db_session:
        yield db_session


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(root=str(tmp_path / "blobs"), public_url="http://assets.test")


# ═══════════════════════════════════════════════════════════════════════════════
# FACTORIES
# ═══════════════════════════════════════════════════════════════════════════════


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, auth_id=user.auth_id, email=user.email)


@pytest.fixture
def make_user(session) -> Callable:
    async def _make_user(name: str = "Ada Lovelace", **fields) -> User:
        user = User(
            auth_id=fields.pop("auth_id", f"auth-{uuid4().hex}"),
            email=fields.pop("email", f"{uuid4().hex[:8]}@example.com"),
            name=name,
            **fields,
        )
        session.add(user)
        await session.commit()
        return user

    return _make_user


@pytest.fixture
def make_story(session) -> Callable:
    async def _make_story(
        user: User,
        title: str = "Billing rewrite",
        display_order: int = 0,
        status: StoryStatus = StoryStatus.PUBLISHED,
        **fields,
    ) -> WorkStory:
        story = WorkStory(
            user_id=user.id,
            template_type=fields.pop("template_type", TemplateType.PROJECT),
            title=title,
            responses=fields.pop("responses", {"problem": "Slow invoices"}),
            assets=fields.pop("assets", []),
            status=status,
            display_order=display_order,
            **fields,
        )
        session.add(story)
        await session.commit()
        return story

    return _make_story


@pytest.fixture
async def owner(make_user) -> User:
    return await make_user("Ada Lovelace", headline="Staff Engineer", bio="Builds engines")


@pytest.fixture
async def stranger(make_user) -> User:
    return await make_user("Charles Babbage")


@pytest.fixture
def owner_principal(owner) -> Principal:
    return principal_for(owner)


@pytest.fixture
def stranger_principal(stranger) -> Principal:
    return principal_for(stranger)


# ═══════════════════════════════════════════════════════════════════════════════
# API
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(test_settings, database, blob_store):
    return create_application(
        test_settings,
        database=database,
        identity_provider=MockIdentityProvider(test_settings),
        blob_store=blob_store,
    )


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    await app.state.view_counter.drain()


@pytest.fixture
def sign_in(client) -> Callable:
    async def _sign_in(auth_id: Optional[str] = None, name: str = "Ada Lovelace") -> dict:
        body = {"auth_id": auth_id or f"auth-{uuid4().hex}", "name": name}
        response = await client.post("/auth/sign-in", json=body)
        assert response.status_code == 200, response.text
        payload = response.json()
        return {
            "user": payload["user"],
            "headers": {"Authorization": f"Bearer {payload['access_token']}"},
        }

    return _sign_in
