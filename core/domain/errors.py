class TaskError(Exception):
    """Base error for the task domain."""


class TaskNotFoundError(TaskError, ValueError):
    """No task with that id belongs to the caller."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskValidationError(TaskError, ValueError):
    pass


class AuthenticationError(TaskError):
    """The bearer credential could not be verified."""
