"""
Pydantic models for task records.

``TaskRead`` is the stored and returned representation of a task.
``TaskCreate`` and ``TaskUpdate`` describe client payloads once they
have passed ``validate_task_data``; they only exist to give the
service typed access to the accepted fields.  Fields are exposed in
camelCase on the wire (``createdAt``, ``startedAt``) and snake_case in
Python.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

PRIORITIES = ("low", "medium", "high")


def parse_timestamp(value: Any) -> Any:
    """Parse an ISO 8601 string into an aware ``datetime``.

    Naive values are taken to be UTC so that every timestamp in the
    collection can be compared with every other one.  Values that are
    neither strings nor datetimes are returned unchanged and left to
    pydantic to reject.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class TaskRead(BaseModel):
    """A task record as held in the collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    completed: bool = False
    priority: str = "low"
    created_at: datetime = Field(..., alias="createdAt")
    started_at: Optional[datetime] = Field(None, alias="startedAt")

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("created_at", "started_at", mode="before")
    @classmethod
    def normalize_timestamp(cls, v):
        return parse_timestamp(v)


class TaskCreate(BaseModel):
    """Schema for creating a new task."""

    title: StrictStr
    description: StrictStr
    completed: StrictBool = False
    priority: str = "low"

    @field_validator("priority")
    @classmethod
    def normalize_priority(cls, v):
        return v.lower()


class TaskUpdate(BaseModel):
    """Schema for updating an existing task.

    All fields are optional; only provided values will be updated.
    ``id`` and ``createdAt`` are not fields here, so a payload carrying
    them cannot change either.
    """

    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None
    priority: Optional[str] = None
    started_at: Optional[datetime] = Field(None, alias="startedAt")

    @field_validator("priority")
    @classmethod
    def normalize_priority(cls, v):
        return v.lower() if v is not None else v

    @field_validator("started_at", mode="before")
    @classmethod
    def normalize_timestamp(cls, v):
        return parse_timestamp(v)
