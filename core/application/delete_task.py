from core.domain.errors import TaskNotFoundError
from core.domain.ports.task_repository import TaskRepository


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, owner_id: str, task_id: str) -> None:
        if not self._repository.delete(task_id, owner_id):
            raise TaskNotFoundError(task_id)
