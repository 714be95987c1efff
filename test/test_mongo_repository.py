from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pymongo import ReturnDocument

from core.domain.models.task import Priority, Task
from infrastructure.mongo.repository.task_repository import MongoTaskRepository

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def _doc(owner_id="alice", **overrides):
    doc = {
        "_id": str(uuid4()),
        "owner_id": owner_id,
        "title": "Stored task",
        "description": "desc",
        "deadline": None,
        "priority": "high",
        "category": "work",
        "completed": False,
        # pymongo returns naive datetimes unless tz_aware is set
        "created_at": NOW.replace(tzinfo=None),
        "updated_at": NOW.replace(tzinfo=None),
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def mock_mongo_collection():
    collection = MagicMock()
    return collection


@pytest.fixture
def mongo_repository(mock_mongo_collection):
    repo = MongoTaskRepository()
    repo.collection = mock_mongo_collection
    return repo


def test_save_task(mongo_repository, mock_mongo_collection):
    task = Task(
        id=str(uuid4()),
        owner_id="alice",
        title="Test task",
        description="Test description",
        priority=Priority.LOW,
        created_at=NOW,
        updated_at=NOW,
    )

    mongo_repository.save(task)

    mock_mongo_collection.update_one.assert_called_once()
    args, kwargs = mock_mongo_collection.update_one.call_args
    assert args[0] == {"_id": task.id, "owner_id": "alice"}
    assert args[1]["$set"]["priority"] == "low"
    assert args[1]["$set"]["owner_id"] == "alice"
    assert kwargs["upsert"] is True


def test_get_task_found(mongo_repository, mock_mongo_collection):
    doc = _doc()
    mock_mongo_collection.find_one.return_value = doc

    result = mongo_repository.get(doc["_id"], "alice")

    mock_mongo_collection.find_one.assert_called_once_with(
        {"_id": doc["_id"], "owner_id": "alice"}
    )
    assert result is not None
    assert result.id == doc["_id"]
    assert result.priority is Priority.HIGH
    assert result.created_at == NOW


def test_get_task_not_found(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = None

    assert mongo_repository.get(str(uuid4()), "alice") is None


def test_list_filters_by_owner(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find.return_value = [
        _doc(title="Task 1"),
        _doc(title="Task 2", completed=True),
    ]

    results = mongo_repository.list("alice")

    mock_mongo_collection.find.assert_called_once_with({"owner_id": "alice"})
    assert [t.title for t in results] == ["Task 1", "Task 2"]
    assert results[1].completed is True


def test_update_is_a_single_scoped_write(mongo_repository, mock_mongo_collection):
    doc = _doc(completed=True, priority="low")
    mock_mongo_collection.find_one_and_update.return_value = doc

    result = mongo_repository.update(
        doc["_id"], "alice", {"completed": True, "priority": Priority.LOW}, NOW
    )

    mock_mongo_collection.find_one_and_update.assert_called_once_with(
        {"_id": doc["_id"], "owner_id": "alice"},
        {"$set": {"completed": True, "priority": "low", "updated_at": NOW}},
        return_document=ReturnDocument.AFTER,
    )
    assert result.completed is True
    assert result.priority is Priority.LOW


def test_update_without_match_returns_none(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one_and_update.return_value = None

    assert mongo_repository.update("missing", "bob", {"title": "x"}, NOW) is None


def test_delete_task(mongo_repository, mock_mongo_collection):
    task_id = str(uuid4())
    mock_mongo_collection.delete_one.return_value.deleted_count = 1

    assert mongo_repository.delete(task_id, "alice") is True

    mock_mongo_collection.delete_one.assert_called_once_with(
        {"_id": task_id, "owner_id": "alice"}
    )


def test_delete_foreign_task_reports_nothing_deleted(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.delete_one.return_value.deleted_count = 0

    assert mongo_repository.delete(str(uuid4()), "bob") is False
