"""
Redis-backed cache service and the cache-aside helper used by read paths.
"""
import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from redis import Redis
from redis.exceptions import RedisError

from app.config import get_settings
from app.exceptions import CacheUnavailableError
from app.monitoring.metrics import track_cache_hit, track_cache_miss

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

HEALTH_CHECK_KEY = "health:check"
HEALTH_CHECK_VALUE = "OK"


class CacheService:
    """
    Сервис кэширования на Redis (sync Redis, вызовы в executor).

    get/set/delete/delete_pattern логируют ошибки Redis и не пробрасывают их:
    кэш на read/write path не должен ронять запрос. Административные
    операции (health_check, dbsize, keys, clear) поднимают
    CacheUnavailableError, чтобы endpoint мог вернуть 503/500.
    """

    def __init__(self, redis: Optional[Redis] = None, default_ttl: Optional[int] = None) -> None:
        settings = get_settings()
        self._redis = redis if redis is not None else Redis.from_url(
            settings.REDIS_URL, decode_responses=True
        )
        self.default_ttl = default_ttl or settings.CACHE_TTL_SECONDS

    def _run(self, fn: Any, *args: Any, **kwargs: Any) -> Any:
        return asyncio.get_event_loop().run_in_executor(
            None, lambda: fn(*args, **kwargs)
        )

    async def get(self, key: str) -> Optional[Any]:
        """Получение значения из кэша."""
        try:
            value = await self._run(self._redis.get, key)
            if value:
                return json.loads(value)
            return None
        except (RedisError, ValueError) as e:
            logger.warning("Cache get error key=%s: %s", key, e, extra={"cache_key": key})
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
    ) -> bool:
        """Установка значения в кэш. None не кэшируется."""
        if value is None:
            return False
        try:
            ttl = ttl or self.default_ttl
            serialized = json.dumps(value)
            await self._run(self._redis.setex, key, ttl, serialized)
            return True
        except (RedisError, TypeError, ValueError) as e:
            logger.warning("Cache set error key=%s: %s", key, e, extra={"cache_key": key})
            return False

    async def delete(self, *keys: str) -> bool:
        """Удаление значений из кэша."""
        if not keys:
            return True
        try:
            await self._run(self._redis.delete, *keys)
            return True
        except RedisError as e:
            logger.warning("Cache delete error keys=%s: %s", keys, e)
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Удаление всех ключей, подходящих под glob-шаблон."""
        try:
            keys = await self._run(lambda: list(self._redis.scan_iter(match=pattern)))
            if keys:
                await self._run(self._redis.delete, *keys)
            return len(keys)
        except RedisError as e:
            logger.warning("Cache delete_pattern error pattern=%s: %s", pattern, e)
            return 0

    async def health_check(self) -> bool:
        """Проверка связи: запись, чтение и удаление маркерного ключа."""
        try:
            await self._run(self._redis.set, HEALTH_CHECK_KEY, HEALTH_CHECK_VALUE)
            retrieved = await self._run(self._redis.get, HEALTH_CHECK_KEY)
            await self._run(self._redis.delete, HEALTH_CHECK_KEY)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis connection error: {e}")
        return retrieved == HEALTH_CHECK_VALUE

    async def dbsize(self) -> int:
        """Приблизительное число ключей в текущей БД."""
        try:
            return await self._run(self._redis.dbsize)
        except RedisError as e:
            raise CacheUnavailableError(f"Failed to get cache stats: {e}")

    async def keys(self, pattern: str = "*") -> List[str]:
        """Список ключей по glob-шаблону."""
        try:
            keys = await self._run(lambda: list(self._redis.scan_iter(match=pattern)))
        except RedisError as e:
            raise CacheUnavailableError(f"Failed to get cache keys: {e}")
        return sorted(keys)

    async def clear(self) -> None:
        """Очистка текущей БД Redis."""
        try:
            await self._run(self._redis.flushdb)
        except RedisError as e:
            raise CacheUnavailableError(f"Failed to clear caches: {e}")
        logger.info("Cache database flushed")


async def cache_aside(
    cache: CacheService,
    key: str,
    loader: Callable[[], Awaitable[Optional[M]]],
    ttl: int,
    model: Type[M],
) -> Optional[M]:
    """
    Read-through lookup: cached value if present, otherwise the loader's result.

    Cached payloads are validated against ``model``; a payload that does not
    match the schema is dropped and treated as a miss. A loader result of None
    is returned as is and never cached.

    Args:
        cache: Cache service
        key: Cache key, ``<cacheName>::<argument>``
        loader: Coroutine function reading the source of truth
        ttl: Time-to-live for a populated entry, seconds
        model: Pydantic schema of the cached value

    Returns:
        Cached or loaded value, or None
    """
    cache_name = key.split("::", 1)[0]
    cached = await cache.get(key)
    if cached is not None:
        try:
            value = model.model_validate(cached)
        except ValidationError as e:
            logger.warning("Dropping malformed cache entry key=%s: %s", key, e, extra={"cache_key": key})
            await cache.delete(key)
        else:
            track_cache_hit(cache_name)
            logger.debug("Cache hit key=%s", key, extra={"cache_key": key})
            return value

    track_cache_miss(cache_name)
    logger.debug("Cache miss key=%s", key, extra={"cache_key": key})
    value = await loader()
    if value is not None:
        await cache.set(key, value.model_dump(mode="json"), ttl)
    return value
