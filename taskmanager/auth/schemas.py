"""
Task Manager API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, computed_field


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
    email: str = Field(..., max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class UserLoginRequest(BaseModel):
    """Request schema for user login. The identifier may be an email or a username."""

    email_or_username: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("email_or_username", "emailOrUsername"),
    )
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public user information response."""

    id: str
    username: str
    email: str
    created_at: datetime


class TokenResponse(BaseModel):
    """Response schema for successful authentication."""

    token: str
    user_id: str
    username: str
    token_type: str = "bearer"

    @computed_field
    @property
    def userId(self) -> str:
        """Camel-case copy of user_id for the single-page client."""
        return self.user_id
