"""
Auth service: registration and credential checks.
"""
import logging

from app.auth.jwt import JWTService
from app.auth.security import SecurityService
from app.database.models.user import User
from app.database.repositories.user_repository import UserRepository
from app.exceptions import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and token issuing"""

    def __init__(
        self,
        repository: UserRepository,
        security: SecurityService,
        jwt_service: JWTService,
    ):
        self.repository = repository
        self.security = security
        self.jwt_service = jwt_service

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Create a new user

        Args:
            username: Username
            email: Email address
            password: Plain text password

        Returns:
            Created user

        Raises:
            ConflictError: If username or email already exists
        """
        logger.info(f"Registering user: {username}")
        if await self.repository.exists_by_username(username):
            raise ConflictError("User with this username already exists")
        if await self.repository.exists_by_email(email):
            raise ConflictError("User with this email already exists")

        return await self.repository.create(
            username=username,
            email=email,
            hashed_password=self.security.hash_password(password),
        )

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials

        Args:
            email: Email address
            password: Plain text password

        Returns:
            Authenticated user

        Raises:
            UnauthorizedError: If email is unknown or password does not match
        """
        logger.info(f"Login attempt: {email}")
        user = await self.repository.get_by_email(email)
        if user is None or not self.security.verify_password(password, user.hashed_password):
            logger.warning(f"Failed login for {email}")
            raise UnauthorizedError("Invalid email or password")
        return user

    def issue_token(self, user: User) -> str:
        """Signed session token for user"""
        return self.jwt_service.create_access_token(user_id=user.id)
