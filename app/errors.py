"""Structured error types and handlers for API responses."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A single rule violation on one request field."""

    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "message": message, "code": code}
    if details:
        payload.update(details)
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.code, self.message, self.details)


class ValidationError(AppError):
    """One or more field rules failed. All violations are reported together."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        message = "Validation failed: " + ", ".join(e.message for e in self.errors)
        super().__init__(message, details={"errors": [e.as_dict() for e in self.errors]})


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"


class TaskNotFound(NotFound):
    code = "TASK_NOT_FOUND"

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)


class SubtaskNotFound(NotFound):
    code = "SUBTASK_NOT_FOUND"

    def __init__(self, message: str = "Subtask not found"):
        super().__init__(message)


class InvalidAssignee(AppError):
    status_code = 400
    code = "INVALID_ASSIGNED_USER"

    def __init__(self, message: str = "Assigned user not found or inactive"):
        super().__init__(message)


class InvalidTaskId(AppError):
    status_code = 400
    code = "INVALID_TASK_ID"

    def __init__(self, message: str = "Parent task not found"):
        super().__init__(message)


class InvalidId(AppError):
    """A path id that is not a positive integer."""

    status_code = 400


class NoFieldsProvided(AppError):
    status_code = 400
    code = "NO_UPDATE_FIELDS"

    def __init__(self, message: str = "No fields to update"):
        super().__init__(message)


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Render pydantic request parsing failures in the same envelope as rule failures."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        errors.append(FieldError(field, f"{field}: {err.get('msg', 'invalid value')}"))
    return await app_error_handler(_, ValidationError(errors))


async def unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    details = None if settings.is_production else {"error": str(exc)}
    payload = build_error_payload("INTERNAL_ERROR", "Internal server error", details)
    return JSONResponse(status_code=500, content=payload)


@contextmanager
def translate_db_errors(action: str) -> Iterator[None]:
    """
    Turn unexpected persistence failures into InternalError.

    AppErrors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Database error while %s: %s", action, exc, exc_info=exc)
        raise InternalError(f"An error occurred while {action}") from exc
