import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError

from taskmanager.config import settings
from taskmanager.auth.models import User
from taskmanager.auth.repository import DuplicateUserError, UserRepositoryInterface

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class AuthService:
    """Authentication service with password hashing and JWT operations."""

    def __init__(self, repository: UserRepositoryInterface):
        self.repository = repository

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        hashed_bytes = hashed_password.encode("utf-8")
        try:
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

        now = datetime.now(timezone.utc)
        expire = now + expires_delta
        to_encode = {
            "sub": user_id,
            "exp": expire,
            "iat": now,
        }
        return jwt.encode(
            to_encode,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    def decode_token(self, token: str) -> Optional[str]:
        """Decode and validate a JWT token. Returns user_id if valid."""
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
        except JWTError:
            return None
        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            return None
        return user_id

    async def register_user(self, username: str, email: str, password: str) -> Optional[User]:
        """Register a new user. Returns None if the username or email is taken."""
        if await self.repository.exists(username, email):
            logger.info(f"Registration rejected, username or email taken: username={username}")
            return None

        password_hash = self.hash_password(password)
        user = User.create(username=username, email=email, password_hash=password_hash)
        try:
            created = await self.repository.create(user)
        except DuplicateUserError:
            return None
        logger.info(f"Registered user: username={created.username}, id={created.id}")
        return created

    async def authenticate_user(self, email_or_username: str, password: str) -> Optional[User]:
        """Authenticate user by email or username and password."""
        user = await self.repository.get_by_email_or_username(email_or_username)
        if user is None:
            logger.info("Login failed: unknown identifier")
            return None
        if not self.verify_password(password, user.password_hash):
            logger.info(f"Login failed: wrong password for user id={user.id}")
            return None
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return await self.repository.get_by_id(user_id)
