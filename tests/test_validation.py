"""Unit tests for field rules, sanitizers and query parsing."""

from datetime import date, datetime

import pytest

from app.schemas.subtask import SubtaskCreate
from app.schemas.task import TaskCreate
from app.validation import common
from app.validation.subtasks import (
    sanitize_subtask_fields,
    validate_subtask_create,
    validate_subtask_update,
)
from app.validation.tasks import (
    parse_task_filters,
    sanitize_task_create,
    sanitize_task_update,
    validate_task_create,
    validate_task_update,
)


def _messages(errors):
    return [e.message for e in errors]


@pytest.mark.unit
def test_task_title_rules():
    assert _messages(validate_task_create(TaskCreate())) == ["Title is required"]
    assert _messages(validate_task_create(TaskCreate(title="ab"))) == [
        "Title must be at least 3 characters long"
    ]
    assert _messages(validate_task_create(TaskCreate(title="x" * 256))) == [
        "Title must not exceed 255 characters"
    ]
    assert validate_task_create(TaskCreate(title="Prepare term report")) == []


@pytest.mark.unit
def test_task_title_rules_apply_after_markup_is_stripped():
    assert _messages(validate_task_create(TaskCreate(title="<<<>>>"))) == ["Title is required"]
    assert _messages(validate_task_update({"title": "<a>"})) == [
        "Title must be at least 3 characters long"
    ]
    assert validate_task_update({"title": "<b>Fees</b>"}) == []


@pytest.mark.unit
def test_task_create_reports_every_violation():
    data = TaskCreate(
        title="",
        description="d" * 1001,
        priority="urgent",
        assigned_to=-4,
        due_date="next week",
    )
    fields = [e.field for e in validate_task_create(data)]
    assert fields == ["title", "description", "priority", "assigned_to", "due_date"]


@pytest.mark.unit
def test_inline_subtask_errors_are_prefixed():
    data = TaskCreate(
        title="Open day",
        subtasks=[{"subtask_title": "Book hall"}, {"subtask_title": "  ", "subtask_date": "2024-02-30"}],
    )
    errors = validate_task_create(data)
    assert [e.field for e in errors] == ["subtasks[1].subtask_title", "subtasks[1].subtask_date"]


@pytest.mark.unit
def test_task_update_checks_only_present_fields():
    assert validate_task_update({}) == []
    assert validate_task_update({"priority": "high"}) == []
    errors = validate_task_update({"status": "blocked", "approval_status": "maybe"})
    assert _messages(errors) == [
        "Invalid status. Must be one of: todo, in_progress, done",
        "Invalid approval status. Must be one of: pending, approved, rejected",
    ]
    assert _messages(validate_task_update({"title": ""})) == ["Title is required"]


@pytest.mark.unit
def test_sanitize_task_create_defaults_and_cleans():
    values = sanitize_task_create(
        TaskCreate(title="  <b>Fees</b> review ", description="   ", due_date="2024-09-01")
    )
    assert values == {
        "title": "bFees/b review",
        "description": None,
        "assigned_to": None,
        "priority": "medium",
        "due_date": date(2024, 9, 1),
    }


@pytest.mark.unit
def test_sanitize_task_update_parses_dates():
    values = sanitize_task_update(
        {"due_date": "", "approval_date": "2024-05-01T10:30:00Z", "status": "done"}
    )
    assert values == {
        "due_date": None,
        "approval_date": datetime(2024, 5, 1, 10, 30),
        "status": "done",
    }


@pytest.mark.unit
def test_subtask_create_requires_parent_and_title():
    errors = validate_subtask_create(SubtaskCreate())
    assert _messages(errors) == ["Valid task ID is required", "Subtask title is required"]

    errors = validate_subtask_create(SubtaskCreate(relation_task_id=1, subtask_title="   "))
    assert _messages(errors) == ["Subtask title cannot be empty"]


@pytest.mark.unit
def test_subtask_update_limits():
    errors = validate_subtask_update(
        {
            "subtask_description": "x" * 5001,
            "subtask_comment": "y" * 2001,
            "assigned_to": 0,
            "subtask_status": "archived",
        }
    )
    assert [e.field for e in errors] == [
        "subtask_description",
        "assigned_to",
        "subtask_status",
        "subtask_comment",
    ]


@pytest.mark.unit
def test_sanitize_subtask_fields():
    values = sanitize_subtask_fields(
        {
            "subtask_title": "  Collect forms ",
            "subtask_comment": "  ",
            "subtask_date": "2024-03-15",
        }
    )
    assert values == {
        "subtask_title": "Collect forms",
        "subtask_comment": None,
        "subtask_date": date(2024, 3, 15),
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-02-29", date(2024, 2, 29)),
        ("2024-02-30", None),
        ("2023-02-29", None),
        ("2024-2-3", None),
        ("2024-03-15T00:00:00", None),
    ],
)
def test_parse_strict_day(raw, expected):
    assert common.parse_strict_day(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("3", "25", (3, 25)),
        ("0", "-5", (1, 10)),
        ("abc", "500", (1, 100)),
    ],
)
def test_validate_pagination(page, limit, expected):
    assert common.validate_pagination(page, limit) == expected


@pytest.mark.unit
def test_invalid_filters_are_ignored():
    filters = parse_task_filters(
        status="bogus",
        priority="high",
        assigned_to="x",
        created_by="2",
        search="  report ",
    )
    assert filters.status is None
    assert filters.priority == "high"
    assert filters.assigned_to is None
    assert filters.created_by == 2
    assert filters.search == "report"
