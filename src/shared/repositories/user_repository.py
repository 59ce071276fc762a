"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with identity-provider lookups.

Common Operations:
==================
- get_by_auth_id()   → Find the user bound to an identity provider subject

Usage Example:
==============
    repo = UserRepository(db)
    user = await repo.get_by_auth_id(auth_user.id)
    if not user:
        user = await repo.create(auth_id=auth_user.id, name=auth_user.name)
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize UserRepository.

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    async def get_by_auth_id(self, auth_id: str) -> Optional[User]:
        """
        Get the user bound to an identity provider subject.

        Args:
            auth_id: Subject reported by the identity provider

        Returns:
            User if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE auth_id = 'a1b2c3d4-...'
        """
        result = await self.session.execute(select(User).where(User.auth_id == auth_id))
        return result.scalar_one_or_none()
