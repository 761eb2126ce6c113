"""
User model
"""
from typing import Any, Dict, List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database.models.base import BaseModel


class User(BaseModel):
    """
    User model for authentication and favorites

    Attributes:
        id: Opaque string identifier
        username: Unique username (3-20 chars)
        email: Unique email address (up to 50 chars)
        hashed_password: BCrypt hashed password
        favorite_countries: Ordered list of favorite countries, stored as
            dicts with country_code, country_name and flag_url keys
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=False
    )
    email: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    favorite_countries: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', email='{self.email}')>"
