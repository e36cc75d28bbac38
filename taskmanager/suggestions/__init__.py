"""
Task Manager API - Suggestions Module

AI subtask suggestions proxied to Gemini.
"""

from taskmanager.suggestions.router import router as suggestions_router

__all__ = ["suggestions_router"]
