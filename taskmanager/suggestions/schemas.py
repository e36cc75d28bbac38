"""
Task Manager API - Suggestion Schemas

Pydantic models for the subtask suggestion endpoint.
"""

from typing import List

from pydantic import AliasChoices, BaseModel, Field, field_validator


class SuggestRequest(BaseModel):
    """Request model for subtask suggestions."""

    main_task_title: str = Field(
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("main_task_title", "mainTaskTitle"),
        description="Title of the task to break down",
    )

    @field_validator("main_task_title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Main task title is required")
        return value


class SuggestResponse(BaseModel):
    """Response model for subtask suggestions."""

    suggestions: List[str] = Field(description="Suggested subtask titles")
