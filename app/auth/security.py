"""Security service for password hashing"""
from passlib.context import CryptContext


class SecurityService:
    """Service for security operations"""

    # Bcrypt only uses the first 72 bytes of the password
    BCRYPT_MAX_BYTES = 72

    def __init__(self, rounds: int = 10):
        """
        Initialize security service with bcrypt context

        Args:
            rounds: bcrypt cost factor
        """
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash_password(self, password: str) -> str:
        """
        Hash a password using bcrypt

        Input is always treated as plaintext, even when it looks like a hash.

        Args:
            password: Plain text password

        Returns:
            Hashed password string

        Raises:
            ValueError: If password is empty
        """
        if not password:
            raise ValueError("Password must not be empty")

        password_bytes = password.encode('utf-8')
        if len(password_bytes) > self.BCRYPT_MAX_BYTES:
            password = password_bytes[:self.BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')

        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hashed password

        Args:
            plain_password: Plain text password
            hashed_password: Hashed password

        Returns:
            True if password matches, False otherwise
        """
        if not plain_password or not hashed_password:
            return False

        password_bytes = plain_password.encode('utf-8')
        if len(password_bytes) > self.BCRYPT_MAX_BYTES:
            plain_password = password_bytes[:self.BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')

        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Stored value is not a recognizable hash
            return False
