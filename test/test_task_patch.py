from datetime import datetime, timezone

import pytest

from core.domain.errors import TaskValidationError
from core.domain.models.task import MISSING, Priority, TaskPatch


def test_empty_patch_has_no_changes():
    patch = TaskPatch()

    assert patch.is_empty()
    assert patch.changes() == {}


def test_changes_contain_only_present_fields():
    deadline = datetime(2026, 3, 1, tzinfo=timezone.utc)
    patch = TaskPatch(priority=Priority.HIGH, deadline=deadline)

    assert patch.changes() == {"priority": Priority.HIGH, "deadline": deadline}
    assert patch.title is MISSING


def test_explicit_null_clears_nullable_fields():
    patch = TaskPatch(description=None, deadline=None, category=None)

    assert patch.changes() == {"description": None, "deadline": None, "category": None}


@pytest.mark.parametrize("field", ["title", "priority", "completed"])
def test_null_is_rejected_for_required_fields(field):
    with pytest.raises(TaskValidationError):
        TaskPatch(**{field: None}).changes()


def test_title_is_trimmed_and_must_not_be_blank():
    assert TaskPatch(title="  Plan trip ").changes() == {"title": "Plan trip"}

    with pytest.raises(TaskValidationError, match="Title is required"):
        TaskPatch(title="  ").changes()


def test_blank_text_fields_become_none():
    assert TaskPatch(description="  ", category=" work ").changes() == {
        "description": None,
        "category": "work",
    }
