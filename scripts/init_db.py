"""
Database initialization script

Creates the database schema for local development.
In production, apply the Alembic migrations instead.
"""
import asyncio
import logging

from app.database.connection import engine
from app.database.models import BaseModel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_tables() -> bool:
    """
    Create all database tables

    Returns:
        True if tables were created
    """
    logger.info("Creating database tables...")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)
        logger.info("Database tables created successfully!")
        return True
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}")
        return False
    finally:
        await engine.dispose()


if __name__ == "__main__":
    ok = asyncio.run(create_tables())
    raise SystemExit(0 if ok else 1)
