"""
User repository for user-related database operations
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database.repositories.base import BaseRepository
from app.database.models.user import User


class UserRepository(BaseRepository[User]):
    """
    Repository for User model operations
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize UserRepository

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    async def create(
        self,
        username: str,
        email: str,
        hashed_password: str,
    ) -> User:
        """
        Create a new user with an empty favorites list

        Args:
            username: Username
            email: Email address
            hashed_password: Already hashed password

        Returns:
            Created user instance

        Raises:
            ConflictError: If username or email is taken
        """
        user = User(
            username=username,
            email=email,
            hashed_password=hashed_password,
            favorite_countries=[],
        )
        return await self.save(user)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email

        Args:
            email: Email address

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username

        Args:
            username: Username

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        """Check whether a username is taken"""
        return await self.exists(username=username)

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is registered"""
        return await self.exists(email=email)
