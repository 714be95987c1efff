from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from core.domain.models.task import Task


class TaskRepository(ABC):
    """
    Persistence port for tasks.

    Every lookup is scoped by owner: a task that exists under another owner
    behaves exactly like a task that does not exist.
    """

    @abstractmethod
    def list(self, owner_id: str) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def save(self, task: Task) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: str, owner_id: str) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        task_id: str,
        owner_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """Applies all `changes` in one write; None when nothing matched."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: str, owner_id: str) -> bool:
        raise NotImplementedError
