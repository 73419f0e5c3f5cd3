"""
Service layer for the in-memory task list.

A ``TaskService`` instance owns the ordered collection of tasks for the
lifetime of the process.  The application factory creates one service
and stores it on ``app.state``; request handlers receive it through a
dependency, so each test can work against its own collection.

Read operations work on a point-in-time copy of the collection.
Create, update and delete commit their change to the stored collection
before returning.  All operations are synchronous and run to
completion on the event loop.

Errors are reported by raising ``TaskValidationError`` (bad input) or
``TaskNotFoundError`` (no matching record).
"""

from __future__ import annotations

import logging
import random
import re
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, Union

from task_list_api.app.core.errors import TaskNotFoundError, TaskValidationError
from task_list_api.app.core.seed import load_seed_tasks
from task_list_api.app.schemas.task import PRIORITIES, TaskCreate, TaskRead, TaskUpdate
from task_list_api.app.services.validation import validate_task_data

logger = logging.getLogger(__name__)

# Query value of ``sortBy`` -> attribute of ``TaskRead``.
SORT_FIELDS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "completed": "completed",
    "createdAt": "created_at",
    "priority": "priority",
}

# Path ids must be plain ASCII integers.
INTEGER_ID = re.compile(r"-?[0-9]+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """Service for listing, creating, updating and deleting tasks."""

    def __init__(
        self,
        tasks: Optional[Iterable[TaskRead]] = None,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._tasks: List[TaskRead] = list(tasks or [])
        self._clock = clock
        self._rng = rng or random.Random()

    @classmethod
    def from_seed_file(
        cls,
        path: str,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ) -> "TaskService":
        """Build a service whose collection is loaded from the seed file at ``path``.

        The load is blocking and finishes before the service is returned.
        Seed records missing a priority get one drawn from ``rng``.
        """
        rng = rng or random.Random()
        return cls(load_seed_tasks(path, clock=clock, rng=rng), clock=clock, rng=rng)

    def __len__(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _snapshot(self) -> List[TaskRead]:
        return list(self._tasks)

    def _index_of(self, task_id: Union[int, str]) -> int:
        """Return the position of the task with ``task_id`` or raise ``TaskNotFoundError``.

        ``task_id`` may be the raw path segment.  Only a plain ASCII integer
        (optional minus sign, digits only) can match a task; underscores,
        whitespace and non-ASCII digits that ``int`` would accept do not.
        """
        wanted = None
        if isinstance(task_id, int) and not isinstance(task_id, bool):
            wanted = task_id
        elif isinstance(task_id, str) and INTEGER_ID.fullmatch(task_id):
            wanted = int(task_id)
        for index, task in enumerate(self._tasks):
            if task.id == wanted:
                return index
        raise TaskNotFoundError(f"Task with ID '{task_id}' not found.")

    def next_id(self) -> int:
        return max((task.id for task in self._tasks), default=0) + 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_tasks(
        self,
        completed: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[TaskRead]:
        """Return the tasks, optionally filtered by completion or sorted.

        A ``completed`` filter takes precedence; when it is supplied the
        sort parameters are ignored.  Without either, the collection is
        returned in stored order.
        """
        tasks = self._snapshot()

        if completed is not None:
            value = completed.lower()
            if value not in ("true", "false"):
                raise TaskValidationError(
                    "Invalid 'completed' query parameter. Must be 'true' or 'false'."
                )
            wanted = value == "true"
            return [task for task in tasks if task.completed is wanted]

        if sort_by is not None:
            if sort_by not in SORT_FIELDS:
                raise TaskValidationError(
                    f"Invalid 'sortBy' parameter. Must be one of: {', '.join(SORT_FIELDS)}."
                )
            order = (sort_order or "asc").lower()
            if order not in ("asc", "desc"):
                raise TaskValidationError("Invalid 'sortOrder' parameter. Must be 'asc' or 'desc'.")
            attribute = SORT_FIELDS[sort_by]
            # sorted() is stable in both directions, so ties keep stored order.
            return sorted(tasks, key=lambda task: getattr(task, attribute), reverse=order == "desc")

        return tasks

    def list_by_priority(self, priority: str) -> List[TaskRead]:
        """Return every task with ``priority`` (case-insensitive)."""
        value = priority.lower()
        if value not in PRIORITIES:
            raise TaskValidationError("Invalid priority value. Must be 'low', 'medium', or 'high'.")
        tasks = [task for task in self._snapshot() if task.priority == value]
        if not tasks:
            raise TaskNotFoundError(f"No tasks found with priority '{value}'.")
        return tasks

    def get_task(self, task_id: Union[int, str]) -> TaskRead:
        return self._tasks[self._index_of(task_id)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_task(self, payload: Any) -> TaskRead:
        """Validate ``payload`` and append a new task built from it."""
        error = validate_task_data(payload, is_new_task=True)
        if error:
            raise TaskValidationError(error)
        data = TaskCreate.model_validate(payload)
        task = TaskRead(
            id=self.next_id(),
            title=data.title,
            description=data.description,
            completed=data.completed,
            priority=data.priority,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        logger.info("Created task %s", task.id)
        return task

    def update_task(self, task_id: Union[int, str], payload: Any) -> TaskRead:
        """Apply a partial update to an existing task.

        Fields absent from ``payload`` keep their current values; ``id``
        and ``createdAt`` are never changed.  The task is looked up
        before the payload is validated, so an unknown id always yields
        ``TaskNotFoundError``.
        """
        index = self._index_of(task_id)
        error = validate_task_data(payload)
        if error:
            raise TaskValidationError(error)
        changes = TaskUpdate.model_validate(payload).model_dump(exclude_unset=True)
        updated = self._tasks[index].model_copy(update=changes)
        self._tasks[index] = updated
        logger.info("Updated task %s (%s)", updated.id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def delete_task(self, task_id: Union[int, str]) -> List[TaskRead]:
        """Remove a task and return the remaining collection."""
        index = self._index_of(task_id)
        removed = self._tasks.pop(index)
        logger.info("Deleted task %s", removed.id)
        return self._snapshot()
