"""
Тесты кэш-сервиса (Redis): CacheService и cache_aside.
"""
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from pydantic import BaseModel
from redis.exceptions import ConnectionError as RedisConnectionError

from app.cache.cache_service import CacheService, cache_aside
from app.exceptions import CacheUnavailableError


class Item(BaseModel):
    name: str
    size: int


@pytest.fixture
def mock_redis():
    """Мок Redis."""
    redis = MagicMock()
    redis.get.return_value = None
    return redis


@pytest.fixture
def mocked_cache(mock_redis):
    """Экземпляр CacheService с мокнутым Redis."""
    with patch("app.cache.cache_service.Redis.from_url", return_value=mock_redis):
        return CacheService()


class TestCacheService:
    """Unit тесты CacheService."""

    @pytest.mark.asyncio
    async def test_get_returns_none_when_key_missing(self, mocked_cache, mock_redis):
        """get возвращает None для несуществующего ключа."""
        result = await mocked_cache.get("missing_key")
        assert result is None
        mock_redis.get.assert_called_once_with("missing_key")

    @pytest.mark.asyncio
    async def test_get_deserializes_json(self, mocked_cache, mock_redis):
        """get десериализует JSON."""
        mock_redis.get.return_value = '{"value": 123}'
        assert await mocked_cache.get("key") == {"value": 123}

    @pytest.mark.asyncio
    async def test_get_swallows_redis_errors(self, mocked_cache, mock_redis):
        """Ошибка Redis на чтении превращается в промах."""
        mock_redis.get.side_effect = RedisConnectionError("down")
        assert await mocked_cache.get("key") is None

    @pytest.mark.asyncio
    async def test_set_serializes_and_stores_with_ttl(self, mocked_cache, mock_redis):
        """set сериализует и сохраняет с TTL."""
        assert await mocked_cache.set("key", {"data": "test"}, ttl=60) is True
        mock_redis.setex.assert_called_once_with("key", 60, '{"data": "test"}')

    @pytest.mark.asyncio
    async def test_set_uses_default_ttl(self, mocked_cache, mock_redis):
        """set по умолчанию использует TTL из настроек (10 минут)."""
        await mocked_cache.set("key", "value")
        assert mocked_cache.default_ttl == 600
        assert mock_redis.setex.call_args[0][1] == 600

    @pytest.mark.asyncio
    async def test_set_skips_none(self, mocked_cache, mock_redis):
        """None не кэшируется."""
        assert await mocked_cache.set("key", None) is False
        mock_redis.setex.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_multiple_keys(self, mocked_cache, mock_redis):
        """delete удаляет все переданные ключи одним вызовом."""
        await mocked_cache.delete("a", "b")
        mock_redis.delete.assert_called_once_with("a", "b")

    @pytest.mark.asyncio
    async def test_delete_pattern(self, cache_service, fake_redis):
        """delete_pattern удаляет только подходящие ключи."""
        fake_redis.set("userProfile::1", "{}")
        fake_redis.set("userProfile::2", "{}")
        fake_redis.set("other::1", "{}")

        removed = await cache_service.delete_pattern("userProfile::*")

        assert removed == 2
        assert fake_redis.get("other::1") == "{}"
        assert fake_redis.get("userProfile::1") is None


class TestCacheAdminOperations:
    """Административные операции поднимают CacheUnavailableError."""

    @pytest.mark.asyncio
    async def test_health_check_roundtrip(self, cache_service, fake_redis):
        """health_check пишет, читает и удаляет маркерный ключ."""
        assert await cache_service.health_check() is True
        assert fake_redis.get("health:check") is None

    @pytest.mark.asyncio
    async def test_health_check_mismatch(self, mocked_cache, mock_redis):
        """Несовпадение прочитанного значения - неуспех без исключения."""
        mock_redis.get.return_value = None
        assert await mocked_cache.health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_raises_when_down(self, mocked_cache, mock_redis):
        mock_redis.set.side_effect = RedisConnectionError("refused")
        with pytest.raises(CacheUnavailableError) as exc_info:
            await mocked_cache.health_check()
        assert "refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_dbsize_keys_and_clear(self, cache_service, fake_redis):
        fake_redis.set("b", "1")
        fake_redis.set("a", "1")

        assert await cache_service.dbsize() == 2
        assert await cache_service.keys() == ["a", "b"]
        assert await cache_service.keys("a*") == ["a"]

        await cache_service.clear()
        assert await cache_service.dbsize() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, redis_attr", [
        ("dbsize", "dbsize"),
        ("keys", "scan_iter"),
        ("clear", "flushdb"),
    ])
    async def test_admin_errors_raise(self, mocked_cache, mock_redis, method, redis_attr):
        getattr(mock_redis, redis_attr).side_effect = RedisConnectionError("down")
        with pytest.raises(CacheUnavailableError):
            await getattr(mocked_cache, method)()


class TestCacheAside:
    """Unit тесты cache_aside."""

    @pytest.mark.asyncio
    async def test_hit_skips_loader(self, cache_service):
        """При попадании loader не вызывается."""
        await cache_service.set("items::1", {"name": "cached", "size": 1}, 600)
        loader = AsyncMock()

        result = await cache_aside(cache_service, "items::1", loader, 600, Item)

        assert result == Item(name="cached", size=1)
        loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_miss_loads_and_populates(self, cache_service, fake_redis):
        """При промахе значение загружается и кладётся в кэш с TTL."""
        loader = AsyncMock(return_value=Item(name="fresh", size=2))

        result = await cache_aside(cache_service, "items::2", loader, 600, Item)

        assert result.name == "fresh"
        loader.assert_awaited_once()
        assert await cache_service.get("items::2") == {"name": "fresh", "size": 2}
        assert fake_redis.ttl("items::2") == 600

    @pytest.mark.asyncio
    async def test_absent_value_not_cached(self, cache_service, fake_redis):
        """Отсутствующее значение не кэшируется."""
        loader = AsyncMock(return_value=None)

        assert await cache_aside(cache_service, "items::3", loader, 600, Item) is None
        assert await cache_aside(cache_service, "items::3", loader, 600, Item) is None

        assert loader.await_count == 2
        assert fake_redis.dbsize() == 0

    @pytest.mark.asyncio
    async def test_malformed_entry_is_dropped(self, cache_service):
        """Запись, не подходящая под схему, считается промахом и перезаписывается."""
        await cache_service.set("items::4", {"@class": "java.util.HashMap", "name": 1}, 600)
        loader = AsyncMock(return_value=Item(name="fresh", size=4))

        result = await cache_aside(cache_service, "items::4", loader, 600, Item)

        assert result.size == 4
        assert await cache_service.get("items::4") == {"name": "fresh", "size": 4}

    @pytest.mark.asyncio
    async def test_redis_down_falls_back_to_loader(self, mocked_cache, mock_redis):
        """Недоступный Redis не ломает чтение."""
        mock_redis.get.side_effect = RedisConnectionError("down")
        mock_redis.setex.side_effect = RedisConnectionError("down")
        loader = AsyncMock(return_value=Item(name="db", size=5))

        result = await cache_aside(mocked_cache, "items::5", loader, 600, Item)

        assert result.name == "db"

    @pytest.mark.asyncio
    async def test_lookups_log_cache_key(self, cache_service, caplog):
        """Записи лога промаха и попадания несут ключ в cache_key."""
        loader = AsyncMock(return_value=Item(name="logged", size=6))

        with caplog.at_level(logging.DEBUG, logger="app.cache.cache_service"):
            await cache_aside(cache_service, "items::6", loader, 600, Item)
            await cache_aside(cache_service, "items::6", loader, 600, Item)

        keyed = [r.getMessage() for r in caplog.records if getattr(r, "cache_key", None) == "items::6"]
        assert keyed == ["Cache miss key=items::6", "Cache hit key=items::6"]
