from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.domain.models.task import Priority

ALL_CATEGORIES = "all"


class StatusFilter(Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class Task(BaseModel):
    """The API's view of a task (the owner is never sent to the client)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: str
    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskInput(BaseModel):
    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority = Priority.MEDIUM
    category: str | None = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class TaskUpdate(BaseModel):
    """
    Partial update. Only fields that were explicitly set are sent, so
    `TaskUpdate(description=None)` clears the description while
    `TaskUpdate(completed=True)` leaves it alone.
    """

    title: str | None = None
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority | None = None
    category: str | None = None
    completed: bool | None = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)
