"""
Task Manager API - Authentication Module

Register/login with JWT authentication.
"""

from taskmanager.auth.router import router as auth_router
from taskmanager.auth.dependencies import get_current_user

__all__ = ["auth_router", "get_current_user"]
