"""
Cache API: состояние Redis, статистика, очистка, список ключей.

Авторизации нет: в production эти endpoint'ы нужно закрыть.
"""
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.auth.dependencies import get_cache_service
from app.cache.cache_service import CacheService
from app.exceptions import CacheUnavailableError, InternalError
from app.schemas.cache import CacheHealthResponse, CacheKeysResponse, CacheStatsResponse
from app.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=CacheHealthResponse)
async def cache_health(cache: CacheService = Depends(get_cache_service)):
    """Проверка Redis: запись, чтение и удаление тестового ключа."""
    try:
        healthy = await cache.health_check()
        message = "Redis connection test failed"
    except CacheUnavailableError as e:
        logger.error(f"Redis health check failed: {e.message}")
        healthy = False
        message = e.message

    if healthy:
        return CacheHealthResponse(status="UP", message="Redis is connected and operational")

    body = CacheHealthResponse(status="DOWN", message=message)
    return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: CacheService = Depends(get_cache_service)):
    """Приблизительное число ключей."""
    try:
        total_keys = await cache.dbsize()
    except CacheUnavailableError as e:
        raise InternalError(e.message)
    return CacheStatsResponse(total_keys=total_keys)


@router.delete("/clear", response_model=MessageResponse)
async def clear_caches(cache: CacheService = Depends(get_cache_service)):
    """Полная очистка текущей БД Redis."""
    try:
        await cache.clear()
    except CacheUnavailableError as e:
        raise InternalError(e.message)
    return MessageResponse(message="All caches cleared successfully")


@router.get("/keys", response_model=CacheKeysResponse)
async def cache_keys(
    pattern: str = Query("*", min_length=1),
    cache: CacheService = Depends(get_cache_service),
):
    """Ключи по glob-шаблону."""
    try:
        keys = await cache.keys(pattern)
    except CacheUnavailableError as e:
        raise InternalError(e.message)
    return CacheKeysResponse(pattern=pattern, keys=keys, count=len(keys))
