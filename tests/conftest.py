"""
Pytest configuration and fixtures for GeoView API tests
"""
import fnmatch
import os
from typing import AsyncGenerator, Dict, Optional, Tuple

import pytest


# Set test environment variables BEFORE any app imports
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
os.environ['REDIS_URL'] = 'redis://localhost:6379/0'
os.environ['JWT_SECRET'] = 'test-secret-key-for-testing-only-32chars'
os.environ['ENABLE_METRICS'] = 'false'
os.environ['LOG_LEVEL'] = 'WARNING'


class FakeRedis:
    """
    In-memory stand-in for the sync redis client used by CacheService.

    Supports only the commands the cache layer issues. Expiry is driven by
    ``now``, which tests move forward with ``advance``.
    """

    def __init__(self):
        self.now = 0.0
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _purge(self) -> None:
        expired = [k for k, (_, exp) in self._data.items() if exp is not None and exp <= self.now]
        for key in expired:
            del self._data[key]

    def get(self, key):
        self._purge()
        entry = self._data.get(key)
        return entry[0] if entry else None

    def set(self, key, value):
        self._data[key] = (value, None)
        return True

    def setex(self, key, ttl, value):
        self._data[key] = (value, self.now + ttl)
        return True

    def ttl(self, key):
        self._purge()
        entry = self._data.get(key)
        if entry is None:
            return -2
        return -1 if entry[1] is None else int(entry[1] - self.now)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
        return removed

    def scan_iter(self, match="*"):
        self._purge()
        return iter([k for k in list(self._data) if fnmatch.fnmatchcase(k, match)])

    def dbsize(self):
        self._purge()
        return len(self._data)

    def flushdb(self):
        self._data.clear()
        return True


@pytest.fixture
async def test_db() -> AsyncGenerator:
    """
    Create an in-memory SQLite database for testing

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from app.database.models import BaseModel

    engine = create_async_engine(
        'sqlite+aiosqlite:///:memory:',
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    async with async_session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def fake_redis():
    """In-memory Redis"""
    return FakeRedis()


@pytest.fixture
def cache_service(fake_redis):
    """CacheService on top of the in-memory Redis"""
    from app.cache.cache_service import CacheService

    return CacheService(redis=fake_redis, default_ttl=600)


@pytest.fixture
def user_cache(cache_service):
    """User caches with the 10 minute TTL"""
    from app.cache.user_cache import UserCache

    return UserCache(cache_service, ttl=600)


@pytest.fixture
def user_repo(test_db):
    """UserRepository bound to the test session"""
    from app.database.repositories.user_repository import UserRepository

    return UserRepository(test_db)


@pytest.fixture
def user_service(user_repo, user_cache):
    """UserService wired to the test store and cache"""
    from app.services.user_service import UserService

    return UserService(user_repo, user_cache)


@pytest.fixture
def security():
    """Fast bcrypt context for tests"""
    from app.auth.security import SecurityService

    return SecurityService(rounds=4)


@pytest.fixture
async def test_user(user_repo, security):
    """Create a sample user for testing"""
    return await user_repo.create(
        username="testuser",
        email="test@example.com",
        hashed_password=security.hash_password("TestPassword123"),
    )


@pytest.fixture
def auth_token(test_user):
    """Generate session token for test user"""
    from app.auth.dependencies import jwt_service

    return jwt_service.create_access_token(user_id=test_user.id)


@pytest.fixture
async def client(test_db, cache_service):
    """
    Create an async HTTP client for testing

    The request session and the cache are replaced with the test ones.
    """
    from httpx import AsyncClient, ASGITransport
    from app.auth.dependencies import get_cache_service
    from app.database.connection import get_db
    from app.main import app

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_service] = lambda: cache_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def authorized_client(client, auth_token):
    """Client carrying the session cookie of test user"""
    client.cookies.set("token", auth_token)
    yield client
