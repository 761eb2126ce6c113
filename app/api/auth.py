"""Authentication endpoints"""
from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_auth_service
from app.config import settings
from app.database.models.user import User
from app.schemas.auth import AuthResponse, AuthUser, UserLogin, UserRegister
from app.schemas.common import MessageResponse
from app.services.auth_service import AuthService

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.cookie_max_age,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
    )


def _auth_response(message: str, token: str, user: User) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=token,
        user=AuthUser(id=user.id, username=user.username, email=user.email),
    )


@router.post("/register", response_model=AuthResponse)
async def register(
    user_data: UserRegister,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user

    - **username**: 3-20 characters
    - **email**: Valid email address, up to 50 characters
    - **password**: 6-120 characters

    Sets an HTTP-only session cookie valid for 7 days.
    """
    user = await auth_service.register(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    token = auth_service.issue_token(user)
    _set_session_cookie(response, token)
    return _auth_response("User registered successfully", token, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user by email and password

    Sets the same session cookie as registration.
    """
    user = await auth_service.authenticate(credentials.email, credentials.password)
    token = auth_service.issue_token(user)
    _set_session_cookie(response, token)
    return _auth_response("Login successful", token, user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
    )
    return MessageResponse(message="Logout successful")
