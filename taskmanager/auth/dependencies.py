from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from taskmanager.database import get_database
from taskmanager.auth.models import User
from taskmanager.auth.service import AuthService
from taskmanager.auth.repository import MongoUserRepository, UserRepositoryInterface


# auto_error=False on both schemes so missing tokens are reported by us
bearer_scheme = HTTPBearer(auto_error=False)
# Header used by clients of the original Express API
token_header_scheme = APIKeyHeader(name="x-auth-token", auto_error=False)


def get_user_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> UserRepositoryInterface:
    """Dependency to get the MongoDB user repository."""
    return MongoUserRepository(db)


def get_auth_service(
    user_repo: Annotated[UserRepositoryInterface, Depends(get_user_repository)]
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(user_repo)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    header_token: Annotated[Optional[str], Depends(token_header_scheme)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Resolve the authenticated user from the request token."""
    token = credentials.credentials if credentials is not None else header_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    invalid_token = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token is not valid",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = auth_service.decode_token(token)
    if user_id is None:
        raise invalid_token

    user = await auth_service.get_user_by_id(user_id)
    if user is None:
        raise invalid_token

    return user


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
