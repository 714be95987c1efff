import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from core.domain.models.task import Priority
from mobile_client.confirmation import ConfirmationFlow
from mobile_client.errors import FormError, TaskClientError
from mobile_client.models import Task, TaskInput, TaskUpdate
from mobile_client.store import TaskStore

logger = logging.getLogger(__name__)


def _blank_to_none(value: str) -> str | None:
    value = value.strip()
    return value or None


@dataclass
class TaskForm:
    """
    State behind the new/edit task screen.

    `deadline` holds the date as typed or picked (YYYY-MM-DD); it is sent as
    midnight UTC of that day.
    """

    title: str = ""
    description: str = ""
    deadline: str = ""
    priority: Priority = Priority.MEDIUM
    category: str = ""
    task_id: str | None = None
    error_text: str = ""
    submitting: bool = False
    deadline_picker: ConfirmationFlow[date] = field(default_factory=ConfirmationFlow)

    @classmethod
    def from_task(cls, task: Task) -> "TaskForm":
        return cls(
            title=task.title,
            description=task.description or "",
            deadline=task.deadline.date().isoformat() if task.deadline else "",
            priority=task.priority,
            category=task.category or "",
            task_id=task.id,
        )

    @property
    def is_editing(self) -> bool:
        return self.task_id is not None

    def build_input(self) -> TaskInput:
        title = self.title.strip()
        if not title:
            raise FormError("Title is required")

        return TaskInput(
            title=title,
            description=_blank_to_none(self.description),
            deadline=self._parse_deadline(),
            priority=self.priority,
            category=_blank_to_none(self.category),
        )

    def open_deadline_picker(self, today: date | None = None) -> None:
        try:
            current = self._parse_deadline()
        except FormError:
            current = None
        initial = current.date() if current else (today or date.today())
        self.deadline_picker.request(initial)

    def pick_deadline(self, picked: date) -> None:
        self.deadline_picker.choose(picked)

    def confirm_deadline(self) -> None:
        self.deadline = self.deadline_picker.confirm().isoformat()

    def cancel_deadline(self) -> None:
        self.deadline_picker.cancel()

    async def submit(self, store: TaskStore) -> bool:
        """Creates or updates the task; on failure `error_text` holds the reason."""
        try:
            task_input = self.build_input()
        except FormError as e:
            self.error_text = e.message
            return False

        self.submitting = True
        self.error_text = ""
        try:
            if self.is_editing:
                # Every field is sent so that cleared fields are cleared on the server.
                await store.update(self.task_id, TaskUpdate(**task_input.model_dump()))
            else:
                await store.add(task_input)
        except TaskClientError as e:
            self.error_text = e.message or "Failed to save task"
            return False
        finally:
            self.submitting = False

        logger.info("Task saved successfully")
        return True

    def _parse_deadline(self) -> datetime | None:
        text = self.deadline.strip()
        if not text:
            return None
        try:
            day = date.fromisoformat(text)
        except ValueError:
            raise FormError("Deadline must be a date in YYYY-MM-DD format")
        return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
