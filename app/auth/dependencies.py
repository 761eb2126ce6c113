"""Authentication and service dependencies for FastAPI"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import JWTService
from app.auth.security import SecurityService
from app.cache.cache_service import CacheService
from app.cache.user_cache import UserCache
from app.config import settings
from app.database.connection import get_db
from app.database.repositories.user_repository import UserRepository
from app.exceptions import UnauthorizedError
from app.services.auth_service import AuthService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

# Bearer header is a fallback for clients that do not keep cookies
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# Initialize services
jwt_service = JWTService(
    secret_key=settings.JWT_SECRET,
    algorithm=settings.JWT_ALGORITHM,
    expires_delta=timedelta(days=settings.JWT_EXPIRE_DAYS),
)

security_service = SecurityService()


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Identity of the caller, established from a verified token"""
    user_id: str


@lru_cache()
def get_cache_service() -> CacheService:
    """Shared Redis cache service"""
    return CacheService()


def get_user_cache(cache_service: CacheService = Depends(get_cache_service)) -> UserCache:
    """User profile caches with the configured TTL"""
    return UserCache(cache_service, ttl=settings.CACHE_TTL_SECONDS)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """User repository bound to the request session"""
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
    user_cache: UserCache = Depends(get_user_cache),
) -> UserService:
    """Cache-aware user service"""
    return UserService(repository, user_cache)


def get_auth_service(
    repository: UserRepository = Depends(get_user_repository),
) -> AuthService:
    """Registration and login service"""
    return AuthService(repository, security_service, jwt_service)


async def get_current_identity(
    token_cookie: Optional[str] = Cookie(None, alias=settings.COOKIE_NAME),
    bearer_token: Optional[str] = Depends(oauth2_scheme),
) -> AuthenticatedIdentity:
    """
    Dependency to get the authenticated identity from the session token

    The ``token`` cookie takes precedence over the Authorization header.

    Returns:
        AuthenticatedIdentity: Verified caller identity

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    token = token_cookie or bearer_token
    if not token:
        raise UnauthorizedError("Not authenticated")

    try:
        user_id = jwt_service.get_user_id_from_token(token)
    except JWTError as e:
        logger.warning(f"get_current_identity: JWT error: {e}")
        raise UnauthorizedError("Invalid or expired token")

    return AuthenticatedIdentity(user_id=user_id)
