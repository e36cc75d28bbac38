"""
Task Manager API - Authentication Router

Endpoints for user registration, login, and current user info.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from taskmanager.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    UserResponse,
    TokenResponse,
)
from taskmanager.auth.service import AuthService
from taskmanager.auth.dependencies import CurrentUser, get_auth_service


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Register a new user and log them in.

    - Username must be 3-50 characters, alphanumeric with underscores
    - Username and email must both be unused
    - Password must be 6-128 characters
    """
    user = await auth_service.register_user(
        username=request.username,
        email=request.email,
        password=request.password,
    )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this username or email already exists",
        )

    return TokenResponse(
        token=auth_service.create_access_token(user_id=user.id),
        user_id=user.id,
        username=user.username,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and get access token",
)
async def login(
    request: UserLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate by email or username and return a JWT access token.

    Send the token back as `Authorization: Bearer <token>`
    (or in the `x-auth-token` header).
    """
    user = await auth_service.authenticate_user(
        email_or_username=request.email_or_username,
        password=request.password,
    )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(
        token=auth_service.create_access_token(user_id=user.id),
        user_id=user.id,
        username=user.username,
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user info",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's public information."""
    return UserResponse(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        created_at=current_user.created_at,
    )
