"""
Task Manager API - Task Router

CRUD endpoints for task management.
All endpoints are JWT-protected and ownership-checked.
"""

from typing import Optional, Annotated

from fastapi import APIRouter, HTTPException, status, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from taskmanager.database import get_database
from taskmanager.auth.dependencies import CurrentUser
from taskmanager.tasks.service import (
    TaskService,
    TaskError,
    InvalidTaskIdError,
    TaskNotFoundError,
    TaskOwnershipError,
)
from taskmanager.tasks.repository import TaskRepository, TaskRepositoryInterface
from taskmanager.tasks.schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskListResponse,
    TaskDeleteResponse,
)
from taskmanager.tasks.enums import TaskStatus, TaskPriority


router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


_TASK_ERRORS = {
    InvalidTaskIdError: (status.HTTP_400_BAD_REQUEST, "Invalid task ID"),
    TaskNotFoundError: (status.HTTP_404_NOT_FOUND, "Task not found"),
    TaskOwnershipError: (status.HTTP_403_FORBIDDEN, "Not authorized"),
}


def _to_http_error(error: TaskError) -> HTTPException:
    status_code, detail = _TASK_ERRORS.get(
        type(error), (status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    )
    return HTTPException(status_code=status_code, detail=detail)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskCreateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    New tasks start in the `pending` status.
    """
    return await service.create_task(owner_id=current_user.id, request=request)


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
    status_filter: Optional[TaskStatus] = Query(
        default=None,
        alias="status",
        description="Filter by task status",
    ),
    priority: Optional[TaskPriority] = Query(
        default=None,
        description="Filter by task priority",
    ),
) -> TaskListResponse:
    """List the authenticated user's tasks, newest first."""
    tasks = await service.list_tasks(
        owner_id=current_user.id,
        status=status_filter,
        priority=priority,
    )
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    try:
        return await service.get_task(task_id, current_user.id)
    except TaskError as e:
        raise _to_http_error(e) from e


@router.api_route(
    "/{task_id}",
    methods=["PUT", "PATCH"],
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Update a task by ID.

    Only provided fields are updated. Send `due_date: null` (or `""`) to
    clear the due date.
    """
    try:
        return await service.update_task(task_id, current_user.id, request)
    except TaskError as e:
        raise _to_http_error(e) from e


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskDeleteResponse:
    try:
        await service.delete_task(task_id, current_user.id)
    except TaskError as e:
        raise _to_http_error(e) from e
    return TaskDeleteResponse(message="Task removed", id=task_id)
