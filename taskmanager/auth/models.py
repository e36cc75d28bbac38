from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from MongoDB."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class User:
    """User entity for authentication."""

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, username: str, email: str, password_hash: str) -> "User":
        """Create a new user with generated ID. Emails are stored lower-cased."""
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            username=username,
            email=email.strip().lower(),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        """Convert user to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "username": self.username,
            "username_lower": self.username.lower(),
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create user from MongoDB document."""
        created_at = _as_utc(data["created_at"])
        return cls(
            id=data["_id"],
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=created_at,
            updated_at=_as_utc(data.get("updated_at")) or created_at,
        )
