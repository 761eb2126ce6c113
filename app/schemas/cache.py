"""
Схемы ответов для /cache.
"""
from typing import List

from app.schemas.common import CamelModel


class CacheHealthResponse(CamelModel):
    """Состояние Redis."""
    status: str
    service: str = "Redis Cache"
    message: str


class CacheStatsResponse(CamelModel):
    """Приблизительная статистика кэша."""
    success: bool = True
    total_keys: int
    cache_type: str = "Redis"


class CacheKeysResponse(CamelModel):
    """Ключи по шаблону."""
    success: bool = True
    pattern: str
    keys: List[str]
    count: int
