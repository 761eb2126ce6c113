"""Authentication module"""
from app.auth.jwt import JWTService, TokenPayload
from app.auth.security import SecurityService

__all__ = ["JWTService", "TokenPayload", "SecurityService"]
