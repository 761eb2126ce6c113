"""
Pydantic schemas for API and services
"""
from app.schemas.common import CamelModel, ErrorResponse, MessageResponse
from app.schemas.user import (
    FavoriteCountry,
    FavoritesResponse,
    ProfileResponse,
    ProfileUpdate,
    UserProfile,
)
from app.schemas.auth import AuthResponse, AuthUser, UserLogin, UserRegister
from app.schemas.cache import CacheHealthResponse, CacheKeysResponse, CacheStatsResponse

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
    "FavoriteCountry",
    "FavoritesResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "UserProfile",
    "AuthResponse",
    "AuthUser",
    "UserLogin",
    "UserRegister",
    "CacheHealthResponse",
    "CacheKeysResponse",
    "CacheStatsResponse",
]
