"""
Shared FastAPI dependencies.
"""

from typing import Optional

from fastapi import Request

from app.core.config import settings
from app.db.session import get_db
from app.errors import InvalidId
from app.schemas.base import PageParams
from app.validation.common import parse_positive_int, validate_pagination

__all__ = ["get_db", "get_actor_id", "get_page_params", "parse_task_id", "parse_subtask_id"]


def get_actor_id(request: Request) -> Optional[int]:
    """
    Id of the user acting on this request, from the actor header.

    There is no session layer here; whatever sits in front of the API is
    expected to set the header. Missing or malformed values give None.
    """
    return parse_positive_int(request.headers.get(settings.ACTOR_HEADER))


def get_page_params(page: Optional[str] = None, limit: Optional[str] = None) -> PageParams:
    page_num, limit_num = validate_pagination(page, limit)
    return PageParams(page=page_num, limit=limit_num)


def parse_task_id(task_id: str) -> int:
    parsed = parse_positive_int(task_id)
    if parsed is None:
        raise InvalidId("Invalid task ID", code="INVALID_TASK_ID")
    return parsed


def parse_subtask_id(subtask_id: str) -> int:
    parsed = parse_positive_int(subtask_id)
    if parsed is None:
        raise InvalidId("Invalid subtask ID", code="INVALID_SUBTASK_ID")
    return parsed
