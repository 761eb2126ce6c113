"""
Схемы для /auth: регистрация, вход, ответ с токеном.
"""
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel
from app.schemas.user import (
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    validate_email_length,
)


class UserRegister(CamelModel):
    """User registration request"""
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=120)

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        return validate_email_length(v)


class UserLogin(CamelModel):
    """User login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthUser(CamelModel):
    """Публичные поля пользователя в ответе auth"""
    id: str
    username: str
    email: str


class AuthResponse(CamelModel):
    """Успешная регистрация или вход"""
    success: bool = True
    message: str
    token: str
    user: AuthUser
