"""
Схемы пользователя: профиль (он же закэшированное значение) и избранные страны.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
EMAIL_MAX_LENGTH = 50


def validate_email_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class FavoriteCountry(CamelModel):
    """Избранная страна. Идентичность определяется кодом страны."""
    country_code: str = Field(..., min_length=1)
    country_name: str = Field(..., min_length=1)
    flag_url: Optional[str] = None

    @field_validator("country_code", "country_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FavoriteCountry):
            return NotImplemented
        return self.country_code == other.country_code

    def __hash__(self) -> int:
        return hash(self.country_code)


class UserProfile(CamelModel):
    """
    Профиль пользователя без пароля.

    Это же закрытая схема значения в кэше userProfile/userByUsername.
    """
    id: str
    username: str
    email: str
    favorite_countries: List[FavoriteCountry] = Field(default_factory=list)
    created_at: datetime

    def has_favorite(self, country_code: str) -> bool:
        return any(c.country_code == country_code for c in self.favorite_countries)


class ProfileUpdate(CamelModel):
    """Тело запроса PUT /user/profile."""
    username: Optional[str] = Field(
        None, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH
    )
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def email_length(cls, v: Optional[str]) -> Optional[str]:
        return validate_email_length(v)


class ProfileResponse(CamelModel):
    """Ответ с профилем."""
    success: bool = True
    message: Optional[str] = None
    user: UserProfile


class FavoritesResponse(CamelModel):
    """Ответ со списком избранных стран."""
    success: bool = True
    message: Optional[str] = None
    favorite_countries: List[FavoriteCountry]
