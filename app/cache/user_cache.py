"""
User caches: profile by id and profile by username.
"""
import logging
from typing import Awaitable, Callable, Optional

from app.cache.cache_service import CacheService, cache_aside
from app.monitoring.metrics import track_cache_eviction
from app.schemas.user import UserProfile

logger = logging.getLogger(__name__)

PROFILE_CACHE = "userProfile"
USERNAME_CACHE = "userByUsername"

ProfileLoader = Callable[[], Awaitable[Optional[UserProfile]]]


class UserCache:
    """Кэш профилей пользователей с фиксированным TTL."""

    def __init__(self, cache_service: CacheService, ttl: Optional[int] = None) -> None:
        self.cache = cache_service
        self.ttl = ttl or cache_service.default_ttl

    @staticmethod
    def profile_key(user_id: str) -> str:
        return f"{PROFILE_CACHE}::{user_id}"

    @staticmethod
    def username_key(username: str) -> str:
        return f"{USERNAME_CACHE}::{username}"

    async def get_profile(self, user_id: str, loader: ProfileLoader) -> Optional[UserProfile]:
        """Профиль по id через кэш."""
        return await cache_aside(self.cache, self.profile_key(user_id), loader, self.ttl, UserProfile)

    async def get_by_username(self, username: str, loader: ProfileLoader) -> Optional[UserProfile]:
        """Профиль по username через кэш."""
        return await cache_aside(self.cache, self.username_key(username), loader, self.ttl, UserProfile)

    async def invalidate(self, user_id: str, *usernames: str) -> None:
        """Удаление записей пользователя из обоих кэшей."""
        keys = [self.profile_key(user_id)]
        keys.extend(self.username_key(name) for name in usernames if name)
        await self.cache.delete(*keys)
        track_cache_eviction("write")
        logger.info("Evicted user cache entries: %s", ", ".join(keys))

    async def clear_all(self) -> int:
        """Удаление всех записей обоих кэшей."""
        removed = 0
        for cache_name in (PROFILE_CACHE, USERNAME_CACHE):
            removed += await self.cache.delete_pattern(f"{cache_name}::*")
        track_cache_eviction("clear_all")
        logger.info("Cleared all user caches (%d keys)", removed)
        return removed
