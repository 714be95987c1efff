from datetime import datetime, timezone
from typing import Any, List
from core.domain.models.task import Priority, Task
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.session.db import db


def _to_utc(value: datetime | None) -> datetime | None:
    # SQLite hands datetimes back naive; everything is stored as UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_column(value: Any) -> Any:
    if isinstance(value, Priority):
        return value.value
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        description=model.description,
        deadline=_to_utc(model.deadline),
        priority=Priority(model.priority),
        category=model.category,
        completed=model.completed,
        created_at=_to_utc(model.created_at),
        updated_at=_to_utc(model.updated_at),
    )


class PeeweeTaskRepository(TaskRepository):
    def __init__(self):
        # Tables are created on init; there are no migrations.
        db.connect(reuse_if_open=True)
        db.create_tables([TaskModel], safe=True)

    def save(self, task: Task) -> None:
        row = {
            "owner_id": task.owner_id,
            "title": task.title,
            "description": task.description,
            "deadline": _to_column(task.deadline),
            "priority": task.priority.value,
            "category": task.category,
            "completed": task.completed,
            "created_at": _to_column(task.created_at),
            "updated_at": _to_column(task.updated_at),
        }
        with db.atomic():
            updated = (
                TaskModel.update(**row)
                .where((TaskModel.id == task.id) & (TaskModel.owner_id == task.owner_id))
                .execute()
            )
            if not updated:
                TaskModel.create(id=task.id, **row)

    def get(self, task_id: str, owner_id: str) -> Task | None:
        try:
            task_model = TaskModel.get(
                (TaskModel.id == task_id) & (TaskModel.owner_id == owner_id)
            )
            return _to_domain(task_model)
        except TaskModel.DoesNotExist:
            return None

    def list(self, owner_id: str) -> List[Task]:
        return [
            _to_domain(t)
            for t in TaskModel.select().where(TaskModel.owner_id == owner_id)
        ]

    def update(
        self,
        task_id: str,
        owner_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        row = {key: _to_column(value) for key, value in changes.items()}
        row["updated_at"] = _to_column(updated_at)
        with db.atomic():
            matched = (
                TaskModel.update(**row)
                .where((TaskModel.id == task_id) & (TaskModel.owner_id == owner_id))
                .execute()
            )
            if not matched:
                return None
            return self.get(task_id, owner_id)

    def delete(self, task_id: str, owner_id: str) -> bool:
        query = TaskModel.delete().where(
            (TaskModel.id == task_id) & (TaskModel.owner_id == owner_id)
        )
        return query.execute() > 0
