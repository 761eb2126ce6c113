"""
Database models
"""
from app.database.models.base import BaseModel
from app.database.models.user import User

__all__ = [
    "BaseModel",
    "User",
]
