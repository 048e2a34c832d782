"""
User Repository.

Data access layer for users.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.user import User
from modules.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    model = User

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by email address (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Check whether the username or email is already taken."""
        result = await self.session.execute(
            select(User.id)
            .where(or_(User.username == username, User.email == email.lower()))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_all_newest_first(self) -> list[User]:
        """Every user, most recently registered first."""
        result = await self.session.execute(
            select(User).order_by(User.created_at.desc())
        )
        return list(result.scalars().all())
