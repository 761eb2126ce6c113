"""
API Router
"""
from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.cache import router as cache_router
from app.api.users import router as users_router

api_router = APIRouter()

# Подключение роутеров
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users_router, prefix="/user", tags=["User"])
api_router.include_router(cache_router, prefix="/cache", tags=["Cache"])
