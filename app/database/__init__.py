"""
Database package
"""
from app.database.connection import engine, async_session_maker, get_db, init_db, close_db
from app.database.models import BaseModel, User
from app.database.repositories import BaseRepository, UserRepository

__all__ = [
    # Connection
    "engine",
    "async_session_maker",
    "get_db",
    "init_db",
    "close_db",
    # Models
    "BaseModel",
    "User",
    # Repositories
    "BaseRepository",
    "UserRepository",
]
