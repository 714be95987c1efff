import os
import unittest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Use memory database for tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from core.domain.models.task import Priority, Task
from infrastructure.peewee.session.db import db
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_task(owner_id: str = "alice", **overrides) -> Task:
    values = dict(
        id=str(uuid4()),
        owner_id=owner_id,
        title="Task Peewee",
        description="desc",
        deadline=NOW + timedelta(days=2),
        priority=Priority.HIGH,
        category="work",
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return Task(**values)


class PeeweeTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        # Ensure clean state
        if db.is_closed():
            db.connect()
        db.create_tables([TaskModel], safe=True)
        TaskModel.delete().execute()
        self.repo = PeeweeTaskRepository()

    def tearDown(self) -> None:
        db.drop_tables([TaskModel])
        db.close()

    def test_save_and_get(self) -> None:
        task = make_task()

        self.repo.save(task)
        loaded = self.repo.get(task.id, "alice")

        self.assertEqual(loaded, task)

    def test_get_is_scoped_to_owner(self) -> None:
        task = make_task()
        self.repo.save(task)

        self.assertIsNone(self.repo.get(task.id, "bob"))

    def test_list_keeps_insertion_order_per_owner(self) -> None:
        first = make_task(title="first")
        self.repo.save(first)
        self.repo.save(make_task(owner_id="bob", title="other"))
        second = make_task(title="second")
        self.repo.save(second)

        self.assertEqual(
            [t.title for t in self.repo.list("alice")], ["first", "second"]
        )

    def test_update_applies_changes_and_timestamp(self) -> None:
        task = make_task()
        self.repo.save(task)
        later = NOW + timedelta(minutes=5)

        updated = self.repo.update(
            task.id,
            "alice",
            {"completed": True, "priority": Priority.LOW, "description": None},
            later,
        )

        self.assertTrue(updated.completed)
        self.assertEqual(updated.priority, Priority.LOW)
        self.assertIsNone(updated.description)
        self.assertEqual(updated.title, task.title)
        self.assertEqual(updated.updated_at, later)
        self.assertEqual(updated.created_at, NOW)

    def test_update_of_foreign_task_changes_nothing(self) -> None:
        task = make_task()
        self.repo.save(task)

        result = self.repo.update(task.id, "bob", {"title": "Hijacked"}, NOW)

        self.assertIsNone(result)
        self.assertEqual(self.repo.get(task.id, "alice").title, "Task Peewee")

    def test_delete(self) -> None:
        task = make_task()
        self.repo.save(task)

        self.assertFalse(self.repo.delete(task.id, "bob"))
        self.assertTrue(self.repo.delete(task.id, "alice"))
        self.assertIsNone(self.repo.get(task.id, "alice"))
        self.assertFalse(self.repo.delete(task.id, "alice"))


if __name__ == "__main__":
    unittest.main()
