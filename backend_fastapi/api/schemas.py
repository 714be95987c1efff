from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from core.application.create_task import CreateTaskCommand
from core.domain.models.task import Priority, Task, TaskPatch


def _assume_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskCreateRequest(BaseModel):
    # Unknown keys (an `owner` or `userId` sent by the client) are dropped.
    model_config = ConfigDict(extra="ignore")

    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority | None = None
    category: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value.strip()

    @field_validator("deadline")
    @classmethod
    def deadline_utc(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)

    def to_command(self) -> CreateTaskCommand:
        return CreateTaskCommand(
            title=self.title,
            description=self.description,
            deadline=self.deadline,
            priority=self.priority or Priority.MEDIUM,
            category=self.category,
        )


class TaskPatchRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority | None = None
    category: str | None = None
    completed: bool | None = None

    @field_validator("deadline")
    @classmethod
    def deadline_utc(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)

    def to_patch(self) -> TaskPatch:
        """Only the keys actually present in the request body end up in the patch."""
        return TaskPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class TaskResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority
    category: str | None = None
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            deadline=task.deadline,
            priority=task.priority,
            category=task.category,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class MessageResponse(BaseModel):
    message: str
