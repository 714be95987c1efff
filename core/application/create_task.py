from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import uuid4

from core.application.clock import utcnow
from core.domain.models.task import Priority, Task, clean_text, require_title
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class CreateTaskCommand:
    title: str
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority = Priority.MEDIUM
    category: str | None = None


class CreateTaskUseCase:
    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, owner_id: str, cmd: CreateTaskCommand) -> Task:
        now = self._clock()
        task = Task(
            id=str(uuid4()),
            owner_id=owner_id,
            title=require_title(cmd.title),
            description=clean_text(cmd.description),
            deadline=cmd.deadline,
            priority=cmd.priority or Priority.MEDIUM,
            category=clean_text(cmd.category),
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._repository.save(task)
        return task
