"""
Database connection management
"""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from app.config import settings
from app.database.models.base import BaseModel
import logging

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Параметры пула (SQLite использует собственный пул без этих опций)"""
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True}


# Создание async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG",
    **_engine_options(settings.database_url)
)

# Создание session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Base для моделей (импортируем из моделей)
Base = BaseModel


async def init_db():
    """Инициализация базы данных"""
    try:
        # В production таблицы создаются Alembic migrations
        if settings.DB_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def close_db():
    """Закрытие соединения с базой данных"""
    try:
        await engine.dispose()
        logger.info("Database connection closed")
    except Exception as e:
        logger.error(f"Failed to close database connection: {e}")


async def get_db() -> AsyncSession:
    """Dependency для получения сессии базы данных"""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()
