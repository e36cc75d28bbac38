import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from taskmanager.auth.models import User

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    """Raised when the store rejects a user because username or email is taken."""


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateUserError on a uniqueness clash."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username (case-insensitive)."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        pass

    async def get_by_email_or_username(self, identifier: str) -> Optional[User]:
        """Resolve a login identifier, trying email first and then username."""
        user = await self.get_by_email(identifier)
        if user is None:
            user = await self.get_by_username(identifier)
        return user

    async def exists(self, username: str, email: str) -> bool:
        """Check if either the username or the email is already registered."""
        if await self.get_by_username(username) is not None:
            return True
        return await self.get_by_email(email) is not None


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError as e:
            logger.warning(f"[MongoUserRepository] Duplicate user rejected by store: username={user.username}")
            raise DuplicateUserError(str(e)) from e
        logger.info(f"[MongoUserRepository] User created: username={user.username}, id={user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_username(self, username: str) -> Optional[User]:
        doc = await self.collection.find_one({"username_lower": username.strip().lower()})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email.strip().lower()})
        if doc is None:
            return None
        return User.from_dict(doc)


class InMemoryUserRepository(UserRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._users: dict[str, User] = {}

    def clear(self) -> None:
        self._users.clear()

    async def create(self, user: User) -> User:
        if await self.exists(user.username, user.email):
            raise DuplicateUserError(user.username)
        self._users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        wanted = username.strip().lower()
        for user in self._users.values():
            if user.username.lower() == wanted:
                return user
        return None

    async def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email == wanted:
                return user
        return None
