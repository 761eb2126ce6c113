"""
Users API: профиль и избранные страны текущего пользователя.
"""
import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import AuthenticatedIdentity, get_current_identity, get_user_service
from app.exceptions import BadRequestError, NotFoundError
from app.schemas.user import (
    FavoriteCountry,
    FavoritesResponse,
    ProfileResponse,
    ProfileUpdate,
    UserProfile,
)
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _require_profile(user_service: UserService, user_id: str) -> UserProfile:
    profile = await user_service.get_user_by_id(user_id)
    if profile is None:
        raise NotFoundError("User not found")
    return profile


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Профиль текущего пользователя (через кэш)."""
    profile = await _require_profile(user_service, identity.user_id)
    return ProfileResponse(user=profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Изменение username/email с инвалидацией кэша."""
    logger.info(f"update_profile called for user_id: {identity.user_id}")
    profile = await user_service.update_profile(
        identity.user_id,
        username=body.username,
        email=body.email,
    )
    if profile is None:
        raise NotFoundError("User not found")
    return ProfileResponse(message="Profile updated successfully", user=profile)


@router.get("/getall/favorite", response_model=FavoritesResponse)
async def get_favorite_countries(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Список избранных стран (через кэш)."""
    profile = await _require_profile(user_service, identity.user_id)
    return FavoritesResponse(favorite_countries=profile.favorite_countries)


@router.post("/favorites", response_model=FavoritesResponse)
async def add_favorite_country(
    favorite: FavoriteCountry,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Добавление страны в избранное (дубликаты по коду отклоняются)."""
    profile = await _require_profile(user_service, identity.user_id)
    if profile.has_favorite(favorite.country_code):
        raise BadRequestError("Country already in favorites")

    updated = await user_service.add_favorite_country(identity.user_id, favorite)
    if updated is None:
        raise NotFoundError("User not found")
    return FavoritesResponse(
        message="Country added to favorites",
        favorite_countries=updated.favorite_countries,
    )


@router.delete("/favorites/{country_code}", response_model=FavoritesResponse)
async def remove_favorite_country(
    country_code: str,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Удаление страны из избранного."""
    updated = await user_service.remove_favorite_country(identity.user_id, country_code)
    if updated is None:
        raise NotFoundError("User not found")
    return FavoritesResponse(
        message="Country removed from favorites",
        favorite_countries=updated.favorite_countries,
    )
