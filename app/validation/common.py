"""
Rule primitives shared by the task and subtask validators.
"""

import re
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Tuple

from app.core.config import settings
from app.errors import FieldError

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MARKUP = re.compile(r"[<>]")


def check_max_length(field: str, value: Optional[str], limit: int, message: str) -> Optional[FieldError]:
    if value is not None and len(value) > limit:
        return FieldError(field, message)
    return None


def check_choice(field: str, value: Optional[str], choices: Iterable[str], label: str) -> Optional[FieldError]:
    """Required enum membership; `label` names the field in messages."""
    choices = tuple(choices)
    if not value:
        return FieldError(field, f"{label} is required")
    if value not in choices:
        return FieldError(field, f"Invalid {label.lower()}. Must be one of: {', '.join(choices)}")
    return None


def check_positive_id(field: str, value: Optional[int], message: str) -> Optional[FieldError]:
    """Optional reference id: None passes, anything else must be > 0."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return FieldError(field, message)
    return None


def parse_date(value: str) -> Optional[date]:
    """Lenient date parse: a calendar day or a full ISO timestamp."""
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_strict_day(value: str) -> Optional[date]:
    """
    Strict YYYY-MM-DD parse.

    The string must have exactly that shape and name a real calendar day,
    so "2024-02-30" is rejected rather than rolled over.
    """
    if not _ISO_DAY.match(value):
        return None
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.isoformat() == value else None


def parse_datetime(value: str) -> Optional[datetime]:
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def strip_markup(value: str) -> str:
    """Trim and drop angle brackets."""
    return _MARKUP.sub("", value.strip())


def trim_or_none(value: Optional[str]) -> Optional[str]:
    """Trim; empty strings become None."""
    if value is None:
        return None
    return value.strip() or None


def parse_positive_int(raw) -> Optional[int]:
    """Best-effort parse of a query/path value; None unless a positive integer."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        number = int(str(raw).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def parse_choice(raw: Optional[str], choices: Iterable[str]) -> Optional[str]:
    """Filter helper: keep the value only if it is one of `choices`."""
    if raw and raw in tuple(choices):
        return raw
    return None


def parse_search(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    return raw.strip() or None


def validate_pagination(page=None, limit=None) -> Tuple[int, int]:
    """
    Normalize paging input.

    Non-numeric or < 1 page becomes 1; non-numeric or < 1 limit becomes the
    default size; limits above MAX_PAGE_SIZE are clamped.
    """
    page_num = parse_positive_int(page) or 1
    limit_num = parse_positive_int(limit) or settings.DEFAULT_PAGE_SIZE
    return page_num, min(limit_num, settings.MAX_PAGE_SIZE)
