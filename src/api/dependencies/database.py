"""
Database Dependency

FastAPI dependency for database sessions.

The Database instance is built by the application factory and stored on
app.state; get_db asks it for one session per request. The session is
committed on success and rolled back on error.

Usage:
======
    from src.api.dependencies.database import DbSession

    @router.get("/stories")
    async def list_stories(db: DbSession):
        repo = WorkStoryRepository(db)
        return await repo.list_for_user(user_id)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db.session import Database


def get_database(request: Request) -> Database:
    """The application's Database (engine + session factory)."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in get_database(request).get_session():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
