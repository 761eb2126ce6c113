"""
Cache layer: Redis-backed cache service and user profile caches.
"""
from app.cache.cache_service import CacheService, cache_aside
from app.cache.user_cache import UserCache

__all__ = [
    "CacheService",
    "cache_aside",
    "UserCache",
]
