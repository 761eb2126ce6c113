"""
Database repositories
"""
from app.database.repositories.base import BaseRepository
from app.database.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
