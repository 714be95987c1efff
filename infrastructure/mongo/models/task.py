from datetime import datetime, timezone

from pydantic import BaseModel, Field

from core.domain.models.task import Priority, Task


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskMongo(BaseModel):
    """
    Task model for MongoDB.
    Mirrors how a task is stored in the `tasks` collection.
    """

    id: str = Field(alias="_id")
    owner_id: str
    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: str = Priority.MEDIUM.value
    category: str | None = None
    completed: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}

    def to_domain(self) -> Task:
        """
        Converts the stored document into the domain entity.

        Returns:
            Task: the domain entity.
        """
        return Task(
            id=self.id,
            owner_id=self.owner_id,
            title=self.title,
            description=self.description,
            deadline=_aware(self.deadline),
            priority=Priority(self.priority),
            category=self.category,
            completed=self.completed,
            created_at=_aware(self.created_at),
            updated_at=_aware(self.updated_at),
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskMongo":
        """
        Builds a TaskMongo from a domain entity.

        Args:
            task (Task): the domain entity.

        Returns:
            TaskMongo: the MongoDB model.
        """
        return cls(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            deadline=task.deadline,
            priority=task.priority.value,
            category=task.category,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
