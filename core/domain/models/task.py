from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any

from core.domain.errors import TaskValidationError


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


# Marks a patch field that was not sent, as opposed to one sent as null.
MISSING = _Missing.MISSING


@dataclass(slots=True)
class Task:
    id: str
    owner_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    deadline: datetime | None = None
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    completed: bool = False


def clean_text(value: str | None) -> str | None:
    """Trims a free-text field, mapping blank values to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_title(title: str | None) -> str:
    cleaned = clean_text(title)
    if cleaned is None:
        raise TaskValidationError("Title is required")
    return cleaned


_NOT_NULLABLE = ("title", "priority", "completed")


@dataclass(slots=True)
class TaskPatch:
    """
    Partial update of a task.

    Every field is either MISSING (left untouched) or carries the new value.
    `description`, `deadline` and `category` accept None to clear them.
    """

    title: str | None | _Missing = MISSING
    description: str | None | _Missing = MISSING
    deadline: datetime | None | _Missing = MISSING
    priority: Priority | None | _Missing = MISSING
    category: str | None | _Missing = MISSING
    completed: bool | None | _Missing = MISSING

    def changes(self) -> dict[str, Any]:
        """
        Validates the whole patch and returns only the present fields.

        Raises:
            TaskValidationError: if any present field is invalid. Nothing is
            returned in that case, so no field can be written.
        """
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is MISSING:
                continue
            if value is None and f.name in _NOT_NULLABLE:
                raise TaskValidationError(f"{f.name} cannot be null")
            result[f.name] = value

        if "title" in result:
            result["title"] = require_title(result["title"])
        for name in ("description", "category"):
            if name in result:
                result[name] = clean_text(result[name])
        return result

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is MISSING for f in fields(self))
