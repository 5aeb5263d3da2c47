"""
Subtask field rules, sanitizers and listing-filter parsing.
"""

from typing import Any, Dict, List, Optional

from app.errors import FieldError
from app.models.base_model import WORK_STATUSES
from app.schemas.subtask import SubtaskCreate, SubtaskFilters
from app.validation import common

TITLE_MAX = 255
DESCRIPTION_MAX = 5000
COMMENT_MAX = 2000


def validate_subtask_title(title: Any, field: str = "subtask_title") -> Optional[FieldError]:
    if title is None:
        return FieldError(field, "Subtask title is required")
    if not isinstance(title, str):
        return FieldError(field, "Subtask title must be a string")
    trimmed = title.strip()
    if not trimmed:
        return FieldError(field, "Subtask title cannot be empty")
    if len(trimmed) > TITLE_MAX:
        return FieldError(field, f"Subtask title must be {TITLE_MAX} characters or less")
    return None


def validate_subtask_date(value: Optional[str], field: str = "subtask_date") -> Optional[FieldError]:
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed and common.parse_strict_day(trimmed) is None:
        return FieldError(field, "Subtask date must be in YYYY-MM-DD format")
    return None


def validate_subtask_status(value: Optional[str], field: str = "subtask_status") -> Optional[FieldError]:
    if value not in WORK_STATUSES:
        return FieldError(field, f"Subtask status must be one of: {', '.join(WORK_STATUSES)}")
    return None


def validate_subtask_fields(
    values: Dict[str, Any],
    *,
    require_title: bool,
    prefix: str = "",
) -> List[FieldError]:
    """
    Check the subtask fields present in `values`.

    Shared by create (title required), partial update (title optional) and
    the inline subtasks of a task create, whose errors are reported under
    `prefix` (e.g. "subtasks[0].").
    """
    errors: List[Optional[FieldError]] = []

    if "subtask_title" in values or require_title:
        errors.append(
            validate_subtask_title(values.get("subtask_title"), f"{prefix}subtask_title")
        )
    if "subtask_description" in values:
        errors.append(
            common.check_max_length(
                f"{prefix}subtask_description",
                values["subtask_description"],
                DESCRIPTION_MAX,
                f"Subtask description must be {DESCRIPTION_MAX} characters or less",
            )
        )
    if "assigned_to" in values:
        errors.append(
            common.check_positive_id(
                f"{prefix}assigned_to",
                values["assigned_to"],
                "Assigned user ID must be a positive number",
            )
        )
    if "subtask_status" in values:
        errors.append(validate_subtask_status(values["subtask_status"], f"{prefix}subtask_status"))
    if "subtask_comment" in values:
        errors.append(
            common.check_max_length(
                f"{prefix}subtask_comment",
                values["subtask_comment"],
                COMMENT_MAX,
                f"Subtask comment must be {COMMENT_MAX} characters or less",
            )
        )
    if "subtask_date" in values:
        errors.append(validate_subtask_date(values["subtask_date"], f"{prefix}subtask_date"))

    return [e for e in errors if e is not None]


def validate_subtask_create(data: SubtaskCreate) -> List[FieldError]:
    errors: List[FieldError] = []
    if data.relation_task_id is None or data.relation_task_id <= 0:
        errors.append(FieldError("relation_task_id", "Valid task ID is required"))
    errors.extend(validate_subtask_fields(data.model_dump(exclude_unset=True), require_title=True))
    return errors


def validate_subtask_update(changes: Dict[str, Any]) -> List[FieldError]:
    return validate_subtask_fields(changes, require_title=False)


def sanitize_subtask_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Column values for the subtask fields present in `values`.

    Text is trimmed, and empty optional text becomes NULL. Assumes the
    values already passed validation.
    """
    sanitized: Dict[str, Any] = {}
    for field, value in values.items():
        if field == "subtask_title":
            sanitized[field] = value.strip()
        elif field in ("subtask_description", "subtask_comment"):
            sanitized[field] = common.trim_or_none(value)
        elif field == "subtask_date":
            day = common.trim_or_none(value)
            sanitized[field] = common.parse_strict_day(day) if day else None
        elif field == "assigned_to":
            sanitized[field] = value or None
        else:
            sanitized[field] = value
    return sanitized


def parse_subtask_filters(
    relation_task_id: Optional[str] = None,
    subtask_status: Optional[str] = None,
    assigned_to: Optional[str] = None,
    search: Optional[str] = None,
) -> SubtaskFilters:
    """Build listing filters from raw query values, dropping invalid ones."""
    return SubtaskFilters(
        relation_task_id=common.parse_positive_int(relation_task_id),
        subtask_status=common.parse_choice(subtask_status, WORK_STATUSES),
        assigned_to=common.parse_positive_int(assigned_to),
        search=common.parse_search(search),
    )
