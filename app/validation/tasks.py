"""
Task field rules, sanitizers and listing-filter parsing.
"""

from typing import Any, Dict, List, Optional

from app.errors import FieldError
from app.models.base_model import APPROVAL_STATUSES, TASK_PRIORITIES, WORK_STATUSES
from app.schemas.task import TaskCreate, TaskFilters
from app.validation import common
from app.validation.subtasks import sanitize_subtask_fields, validate_subtask_fields

TITLE_MIN = 3
TITLE_MAX = 255
DESCRIPTION_MAX = 1000


def validate_title(title: Optional[str]) -> Optional[FieldError]:
    """Length rules apply to the title as stored, after markup is stripped."""
    title = common.strip_markup(title) if title else ""
    if not title:
        return FieldError("title", "Title is required")
    if len(title) < TITLE_MIN:
        return FieldError("title", f"Title must be at least {TITLE_MIN} characters long")
    if len(title) > TITLE_MAX:
        return FieldError("title", f"Title must not exceed {TITLE_MAX} characters")
    return None


def validate_description(description: Optional[str]) -> Optional[FieldError]:
    return common.check_max_length(
        "description",
        description,
        DESCRIPTION_MAX,
        f"Description must not exceed {DESCRIPTION_MAX} characters",
    )


def validate_status(status: Optional[str]) -> Optional[FieldError]:
    return common.check_choice("status", status, WORK_STATUSES, "Status")


def validate_priority(priority: Optional[str]) -> Optional[FieldError]:
    return common.check_choice("priority", priority, TASK_PRIORITIES, "Priority")


def validate_approval_status(approval_status: Optional[str]) -> Optional[FieldError]:
    return common.check_choice("approval_status", approval_status, APPROVAL_STATUSES, "Approval status")


def validate_user_id(field: str, user_id: Optional[int]) -> Optional[FieldError]:
    return common.check_positive_id(field, user_id, "User ID must be a positive integer")


def validate_due_date(due_date: Optional[str]) -> Optional[FieldError]:
    if due_date and common.parse_date(due_date) is None:
        return FieldError("due_date", "Invalid date format")
    return None


def validate_approval_date(approval_date: Optional[str]) -> Optional[FieldError]:
    if approval_date and common.parse_datetime(approval_date) is None:
        return FieldError("approval_date", "Invalid approval date format")
    return None


def _clean_text(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return common.strip_markup(value) or None


def _collect(*results: Optional[FieldError]) -> List[FieldError]:
    return [r for r in results if r is not None]


def validate_task_create(data: TaskCreate) -> List[FieldError]:
    """Check a create payload, including any inline subtasks."""
    errors = _collect(
        validate_title(data.title),
        validate_description(data.description),
        validate_priority(data.priority) if data.priority else None,
        validate_user_id("assigned_to", data.assigned_to),
        validate_due_date(data.due_date),
    )
    for index, subtask in enumerate(data.subtasks):
        errors.extend(
            validate_subtask_fields(
                subtask.model_dump(exclude_unset=True),
                require_title=True,
                prefix=f"subtasks[{index}].",
            )
        )
    return errors


def validate_task_update(changes: Dict[str, Any]) -> List[FieldError]:
    """Check only the fields present in a partial update."""
    checks = {
        "title": validate_title,
        "description": validate_description,
        "status": validate_status,
        "priority": validate_priority,
        "approval_status": validate_approval_status,
        "due_date": validate_due_date,
        "approval_date": validate_approval_date,
        "assigned_to": lambda v: validate_user_id("assigned_to", v),
        "approved_by_user_id": lambda v: validate_user_id("approved_by_user_id", v),
    }
    return _collect(*(checks[field](value) for field, value in changes.items() if field in checks))


def sanitize_task_create(data: TaskCreate) -> Dict[str, Any]:
    """Column values for a new task row. Assumes validate_task_create passed."""
    return {
        "title": common.strip_markup(data.title),
        "description": _clean_text(data.description),
        "assigned_to": data.assigned_to or None,
        "priority": data.priority or "medium",
        "due_date": common.parse_date(data.due_date) if data.due_date else None,
    }


def sanitize_task_update(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Column values for a partial update. Assumes validate_task_update passed."""
    values: Dict[str, Any] = {}
    for field, value in changes.items():
        if field == "title":
            values["title"] = common.strip_markup(value)
        elif field == "description":
            values["description"] = _clean_text(value)
        elif field == "due_date":
            values["due_date"] = common.parse_date(value) if value else None
        elif field == "approval_date":
            values["approval_date"] = common.parse_datetime(value) if value else None
        else:
            values[field] = value
    return values


def sanitize_inline_subtasks(data: TaskCreate) -> List[Dict[str, Any]]:
    return [sanitize_subtask_fields(s.model_dump(exclude_unset=True)) for s in data.subtasks]


def parse_task_filters(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[str] = None,
    created_by: Optional[str] = None,
    approval_status: Optional[str] = None,
    search: Optional[str] = None,
) -> TaskFilters:
    """Build listing filters from raw query values, dropping invalid ones."""
    return TaskFilters(
        status=common.parse_choice(status, WORK_STATUSES),
        priority=common.parse_choice(priority, TASK_PRIORITIES),
        assigned_to=common.parse_positive_int(assigned_to),
        created_by=common.parse_positive_int(created_by),
        approval_status=common.parse_choice(approval_status, APPROVAL_STATUSES),
        search=common.parse_search(search),
    )
