"""
Task Manager API - Task Schemas

Pydantic models for task API requests and responses.
"""

from datetime import datetime
from typing import Any, Optional, List

from pydantic import AliasChoices, BaseModel, Field, field_validator

from taskmanager.tasks.enums import TaskStatus, TaskPriority


def _blank_to_none(value: Any) -> Any:
    # Clients send "" to mean "no due date"
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TaskCreateRequest(BaseModel):
    """Request model for creating a task."""

    title: str = Field(min_length=1, max_length=200, description="Task title")
    description: str = Field(default="", max_length=2000, description="Task description")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "dueDate"),
        description="Task due date",
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task title is required")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def description_none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class TaskUpdateRequest(BaseModel):
    """
    Request model for updating a task.

    Omitted fields are left unchanged. A blank title is ignored; a null or
    empty due date clears it.
    """

    title: Optional[str] = Field(default=None, max_length=200, description="Task title")
    description: Optional[str] = Field(default=None, max_length=2000, description="Task description")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    status: Optional[TaskStatus] = Field(default=None, description="Task status")
    due_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "dueDate"),
        description="Task due date",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    owner_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: str = Field(description="Task description")
    priority: TaskPriority = Field(description="Task priority")
    status: TaskStatus = Field(description="Task status")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class TaskListResponse(BaseModel):
    """Response model for a list of tasks."""

    tasks: List[TaskResponse] = Field(description="List of tasks")
    total: int = Field(description="Total number of tasks in the list")


class TaskDeleteResponse(BaseModel):
    """Response model for task deletion."""

    message: str = Field(description="Success message")
    id: str = Field(description="Deleted task ID")
