"""
Task Manager API - Task Service

Business logic for task operations, including the ownership check that
guards every read, update and delete of a single task.
"""

import logging
import uuid
from typing import Optional, List

from taskmanager.tasks.models import Task
from taskmanager.tasks.repository import TaskRepositoryInterface
from taskmanager.tasks.enums import TaskStatus, TaskPriority
from taskmanager.tasks.schemas import TaskCreateRequest, TaskUpdateRequest, TaskResponse

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base class for task operation failures."""


class InvalidTaskIdError(TaskError):
    """The task id is not a well-formed identifier."""


class TaskNotFoundError(TaskError):
    """No task exists with the given id."""


class TaskOwnershipError(TaskError):
    """The task exists but belongs to a different user."""


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    @staticmethod
    def _validate_task_id(task_id: str) -> None:
        try:
            uuid.UUID(task_id)
        except ValueError as e:
            raise InvalidTaskIdError(task_id) from e

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        """Convert a Task model to TaskResponse."""
        return TaskResponse(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    async def _get_owned_task(self, task_id: str, owner_id: str) -> Task:
        """
        Load a task and verify the caller owns it.

        Raises:
            InvalidTaskIdError: malformed id
            TaskNotFoundError: no such task
            TaskOwnershipError: task belongs to another user
        """
        self._validate_task_id(task_id)
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if not task.is_owned_by(owner_id):
            logger.warning(f"Ownership check failed: user={owner_id} task={task_id}")
            raise TaskOwnershipError(task_id)
        return task

    async def create_task(self, owner_id: str, request: TaskCreateRequest) -> TaskResponse:
        """Create a new task for the owner."""
        task = Task.create(
            owner_id=owner_id,
            title=request.title,
            description=request.description,
            priority=request.priority,
            due_date=request.due_date,
        )
        await self.repository.create(task)
        logger.info(f"Task created: id={task.id} owner={owner_id}")
        return self._task_to_response(task)

    async def get_task(self, task_id: str, owner_id: str) -> TaskResponse:
        """Get a task by ID after the ownership check."""
        task = await self._get_owned_task(task_id, owner_id)
        return self._task_to_response(task)

    async def list_tasks(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> List[TaskResponse]:
        """List the owner's tasks, newest first."""
        tasks = await self.repository.list_by_owner(
            owner_id=owner_id,
            status=status,
            priority=priority,
        )
        return [self._task_to_response(task) for task in tasks]

    async def update_task(
        self,
        task_id: str,
        owner_id: str,
        request: TaskUpdateRequest,
    ) -> TaskResponse:
        """Apply a partial update to a task the caller owns."""
        current = await self._get_owned_task(task_id, owner_id)

        provided = request.model_dump(exclude_unset=True)
        updates: dict = {}

        # A blank title keeps the current one
        title = provided.get("title")
        if title is not None and title.strip():
            updates["title"] = title.strip()
        if provided.get("description") is not None:
            updates["description"] = provided["description"]
        if provided.get("priority") is not None:
            updates["priority"] = request.priority.value
        if provided.get("status") is not None:
            updates["status"] = request.status.value
        if "due_date" in provided:
            updates["due_date"] = request.due_date

        if not updates:
            return self._task_to_response(current)

        task = await self.repository.update(task_id, owner_id, updates)
        if task is None:
            # Deleted between the ownership check and the write
            raise TaskNotFoundError(task_id)
        logger.info(f"Task updated: id={task_id} fields={sorted(updates)}")
        return self._task_to_response(task)

    async def delete_task(self, task_id: str, owner_id: str) -> None:
        """Delete a task the caller owns."""
        await self._get_owned_task(task_id, owner_id)
        if not await self.repository.delete(task_id, owner_id):
            raise TaskNotFoundError(task_id)
        logger.info(f"Task deleted: id={task_id} owner={owner_id}")
