from datetime import datetime
from typing import Any

from pymongo import ReturnDocument
from pymongo.collection import Collection

from core.domain.models.task import Priority, Task
from core.domain.ports.task_repository import TaskRepository
from infrastructure.mongo.models.task import TaskMongo
from infrastructure.mongo.session.client import get_db


def _to_document_fields(changes: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value.value if isinstance(value, Priority) else value
        for key, value in changes.items()
    }


class MongoTaskRepository(TaskRepository):
    """
    TaskRepository backed by MongoDB (synchronous).
    """

    def __init__(self) -> None:
        self.db = get_db()
        self.collection: Collection[Any] = self.db.tasks

    def save(self, task: Task) -> None:
        """
        Inserts or replaces a task.

        Args:
            task (Task): the task to store.
        """
        task_dict = TaskMongo.from_domain(task).model_dump(by_alias=True)

        self.collection.update_one(
            {"_id": task_dict["_id"], "owner_id": task.owner_id},
            {"$set": task_dict},
            upsert=True,
        )

    def get(self, task_id: str, owner_id: str) -> Task | None:
        """
        Fetches a task by id within the owner's tasks.

        Returns:
            Task | None: the task, or None if it does not exist for that owner.
        """
        doc = self.collection.find_one({"_id": task_id, "owner_id": owner_id})
        if not doc:
            return None

        return TaskMongo(**doc).to_domain()

    def list(self, owner_id: str) -> list[Task]:
        """
        Lists the owner's tasks in natural collection order.
        """
        docs = self.collection.find({"owner_id": owner_id})
        return [TaskMongo(**doc).to_domain() for doc in docs]

    def update(
        self,
        task_id: str,
        owner_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """
        Applies the changes with a single find_one_and_update, so either every
        field is written or none is.
        """
        fields = _to_document_fields(changes)
        fields["updated_at"] = updated_at

        doc = self.collection.find_one_and_update(
            {"_id": task_id, "owner_id": owner_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None

        return TaskMongo(**doc).to_domain()

    def delete(self, task_id: str, owner_id: str) -> bool:
        result = self.collection.delete_one({"_id": task_id, "owner_id": owner_id})
        return result.deleted_count == 1
