"""JWT service for token creation and validation"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
from jose import JWTError, jwt
from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Token payload model"""
    user_id: str
    exp: datetime
    iat: datetime


class JWTService:
    """Service for JWT token operations"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=7),
    ):
        """
        Initialize JWT service

        Args:
            secret_key: Secret key for signing tokens
            algorithm: Algorithm to use for token encoding (default: HS256)
            expires_delta: Default token lifetime (default: 7 days)
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed session token

        Args:
            user_id: User ID
            expires_delta: Custom expiration time

        Returns:
            JWT token string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or self.expires_delta)

        to_encode = {
            "user_id": user_id,
            "exp": expire,
            "iat": now,
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token

        Args:
            token: JWT token string

        Returns:
            Dictionary with token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise JWTError(f"Could not validate credentials: {str(e)}")

    def verify_token(self, token: str) -> TokenPayload:
        """
        Verify and decode a token

        Args:
            token: JWT token string

        Returns:
            TokenPayload object

        Raises:
            JWTError: If token is invalid, expired or has no user_id
        """
        payload = self.decode_token(token)
        if not payload.get("user_id"):
            raise JWTError("Token does not contain user_id")
        return TokenPayload(**payload)

    def get_user_id_from_token(self, token: str) -> str:
        """
        Extract user ID from token

        Args:
            token: JWT token string

        Returns:
            User ID

        Raises:
            JWTError: If token is invalid or user_id not found
        """
        return self.verify_token(token).user_id
