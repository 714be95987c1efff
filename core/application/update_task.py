from datetime import datetime
from typing import Callable

from core.application.clock import utcnow
from core.domain.errors import TaskNotFoundError
from core.domain.models.task import Task, TaskPatch
from core.domain.ports.task_repository import TaskRepository


class UpdateTaskUseCase:
    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, owner_id: str, task_id: str, patch: TaskPatch) -> Task:
        # Validation happens before the repository is touched.
        changes = patch.changes()

        task = self._repository.update(task_id, owner_id, changes, self._clock())
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
