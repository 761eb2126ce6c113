"""
User service: cache-aside reads and cache-invalidating writes.
"""
import logging
from typing import Optional

from sqlalchemy import inspect

from app.cache.user_cache import UserCache
from app.database.models.user import User
from app.database.repositories.user_repository import UserRepository
from app.exceptions import ConflictError
from app.schemas.user import FavoriteCountry, UserProfile

logger = logging.getLogger(__name__)


class UserService:
    """
    Operations on users that keep the profile caches coherent.

    Reads go through the cache (populated on miss, misses are never
    cached). Every write goes to the store first and then evicts the
    user's entries from both caches.
    """

    def __init__(self, repository: UserRepository, cache: UserCache):
        self.repository = repository
        self.cache = cache

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """
        Get user profile by id, cached for the configured TTL

        Args:
            user_id: User ID

        Returns:
            UserProfile or None if not found
        """
        async def load() -> Optional[UserProfile]:
            logger.info(f"Fetching user from database for user_id: {user_id}")
            user = await self.repository.get_by_id(user_id)
            return UserProfile.model_validate(user) if user else None

        return await self.cache.get_profile(user_id, load)

    async def get_user_by_username(self, username: str) -> Optional[UserProfile]:
        """
        Get user profile by username, cached for the configured TTL

        Args:
            username: Username

        Returns:
            UserProfile or None if not found
        """
        async def load() -> Optional[UserProfile]:
            logger.info(f"Fetching user from database for username: {username}")
            user = await self.repository.get_by_username(username)
            return UserProfile.model_validate(user) if user else None

        return await self.cache.get_by_username(username, load)

    async def save_user(self, user: User) -> UserProfile:
        """
        Persist user and evict its cache entries

        The by-username entry is evicted for the committed username as well,
        so a rename made on the instance leaves nothing stale behind.

        Args:
            user: User model instance

        Returns:
            Saved profile
        """
        logger.info(f"Saving user and evicting cache for user_id: {user.id}")
        # History is reset by the commit, read it first
        previous_usernames = inspect(user).attrs.username.history.deleted
        saved = await self.repository.save(user)
        await self.cache.invalidate(saved.id, *{*previous_usernames, saved.username})
        return UserProfile.model_validate(saved)

    async def add_favorite_country(
        self,
        user_id: str,
        favorite: FavoriteCountry,
    ) -> Optional[UserProfile]:
        """
        Append a favorite country (no duplicate check at this layer)

        Args:
            user_id: User ID
            favorite: Country to add

        Returns:
            Updated profile or None if user not found
        """
        logger.info(f"Adding favorite country {favorite.country_code} for user_id: {user_id}")
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None
        user.favorite_countries = [*user.favorite_countries, favorite.model_dump()]
        return await self.save_user(user)

    async def remove_favorite_country(self, user_id: str, country_code: str) -> Optional[UserProfile]:
        """
        Remove every favorite with the given country code

        Args:
            user_id: User ID
            country_code: Country code to remove

        Returns:
            Updated profile or None if user not found
        """
        logger.info(f"Removing favorite country {country_code} for user_id: {user_id}")
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None
        user.favorite_countries = [
            c for c in user.favorite_countries if c.get("country_code") != country_code
        ]
        return await self.save_user(user)

    async def update_profile(
        self,
        user_id: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[UserProfile]:
        """
        Change username and/or email

        Evicts the by-id entry and the by-username entries for both the
        old and the new username.

        Args:
            user_id: User ID
            username: New username
            email: New email

        Returns:
            Updated profile or None if user not found

        Raises:
            ConflictError: If username or email belongs to another user
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None

        username_changed = username is not None and username != user.username
        email_changed = email is not None and email != user.email
        # Both checks run before the instance is touched
        if username_changed and await self.repository.exists_by_username(username):
            raise ConflictError("User with this username already exists")
        if email_changed and await self.repository.exists_by_email(email):
            raise ConflictError("User with this email already exists")

        if username_changed:
            user.username = username
        if email_changed:
            user.email = email

        logger.info(f"Updating profile for user_id: {user_id}")
        return await self.save_user(user)

    async def clear_all_user_caches(self) -> int:
        """
        Drop every cached user entry

        Returns:
            Number of removed keys
        """
        logger.info("Clearing all user caches")
        return await self.cache.clear_all()
