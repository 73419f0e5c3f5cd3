"""
Task endpoints for API v1.

These routes expose list, filter, sort, get, create, update and delete
operations on the in-memory task collection.  Every route receives
the ``TaskService`` owned by the application through
``get_task_service``.  Service errors are translated into
``HTTPException`` instances here; the application renders them as
``{"error": "<message>"}``.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from task_list_api.app.core.errors import TaskNotFoundError, TaskValidationError
from task_list_api.app.schemas.task import TaskRead
from task_list_api.app.services.task_service import TaskService

router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    """Return the task service attached to the running application."""
    return request.app.state.task_service


@router.get("", response_model=List[TaskRead], response_model_exclude_none=True)
async def list_tasks(
    completed: Optional[str] = Query(None, description="Return only tasks with this completion status ('true' or 'false')."),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by."),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="'asc' (default) or 'desc'."),
    service: TaskService = Depends(get_task_service),
) -> List[TaskRead]:
    """Return all tasks, optionally filtered by completion or sorted.

    The ``completed`` filter and the sort parameters are mutually
    exclusive: when ``completed`` is supplied, ``sortBy`` and
    ``sortOrder`` are ignored.
    """
    try:
        return service.list_tasks(completed=completed, sort_by=sort_by, sort_order=sort_order)
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/priority/{priority}", response_model=List[TaskRead], response_model_exclude_none=True)
async def list_tasks_by_priority(
    priority: str,
    service: TaskService = Depends(get_task_service),
) -> List[TaskRead]:
    """Return the tasks with the given priority.

    Returns HTTP 400 for an unknown priority and HTTP 404 when no task
    has it.
    """
    try:
        return service.list_by_priority(priority)
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/{task_id}", response_model=TaskRead, response_model_exclude_none=True)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)) -> TaskRead:
    """Retrieve a single task by ID."""
    try:
        return service.get_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "",
    response_model=TaskRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Create a new task.

    ``title`` and ``description`` are required; ``completed`` defaults
    to ``false`` and ``priority`` to ``low``.  Any ``id`` in the body is
    ignored.
    """
    try:
        return service.create_task(payload)
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{task_id}", response_model=TaskRead, response_model_exclude_none=True)
async def update_task(
    task_id: str,
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Update an existing task; only the provided fields change."""
    try:
        return service.update_task(task_id, payload)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{task_id}", response_model=List[TaskRead], response_model_exclude_none=True)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> List[TaskRead]:
    """Delete a task and return the remaining tasks."""
    try:
        return service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
