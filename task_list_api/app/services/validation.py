"""
Validation of client supplied task payloads.

``validate_task_data`` runs in one of two modes.  In creation mode
``title`` and ``description`` are mandatory; in update mode every field
is optional and only the fields present in the payload are checked.
Rules are evaluated in a fixed order and the message of the first
violated rule is returned.
"""

from typing import Any, Optional

from task_list_api.app.schemas.task import PRIORITIES, parse_timestamp

EMPTY_MESSAGE = "Task data cannot be empty."
NOT_AN_OBJECT_MESSAGE = "Task data must be a JSON object."
COMPLETED_MESSAGE = "Completed must be a boolean value if provided."
PRIORITY_MESSAGE = "Priority must be 'low', 'medium', or 'high' if provided."
STARTED_AT_MESSAGE = "StartedAt must be an ISO 8601 timestamp if provided."


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_priority(value: Any) -> bool:
    return isinstance(value, str) and value.lower() in PRIORITIES


def _is_timestamp(value: Any) -> bool:
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    try:
        parse_timestamp(value)
    except ValueError:
        return False
    return True


def validate_task_data(data: Any, is_new_task: bool = False) -> Optional[str]:
    """Return an error message for ``data`` or ``None`` when it is acceptable.

    Parameters
    ----------
    data : Any
        The decoded JSON request body.
    is_new_task : bool
        ``True`` for creation mode, ``False`` for update mode.
    """
    if not data:
        return EMPTY_MESSAGE
    if not isinstance(data, dict):
        return NOT_AN_OBJECT_MESSAGE

    if is_new_task:
        if not _is_non_empty_string(data.get("title")):
            return "Title is required and must be a non-empty string."
        if not _is_non_empty_string(data.get("description")):
            return "Description is required and must be a non-empty string."
    else:
        if "title" in data and not _is_non_empty_string(data["title"]):
            return "Title must be a non-empty string if provided."
        if "description" in data and not _is_non_empty_string(data["description"]):
            return "Description must be a non-empty string if provided."

    if "completed" in data and not isinstance(data["completed"], bool):
        return COMPLETED_MESSAGE
    if "priority" in data and not _is_priority(data["priority"]):
        return PRIORITY_MESSAGE

    if not is_new_task and "startedAt" in data and not _is_timestamp(data["startedAt"]):
        return STARTED_AT_MESSAGE

    return None
