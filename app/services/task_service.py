"""
Task business logic service.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    FieldError,
    InvalidAssignee,
    NoFieldsProvided,
    TaskNotFound,
    ValidationError,
    translate_db_errors,
)
from app.models.task import Task
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.schemas.base import PageParams, Pagination
from app.schemas.task import TaskCreate, TaskFilters, TaskRead, TasksByStatus, TaskUpdate
from app.services.progress import bucket_by_status, summarize_statuses
from app.utils.time import utc_now_naive
from app.validation import tasks as rules

logger = logging.getLogger(__name__)


def to_task_read(task: Task) -> TaskRead:
    """Serialize a fully loaded task, adding its subtask counts."""
    counts = summarize_statuses(s.subtask_status for s in task.subtasks)
    read = TaskRead.model_validate(task)
    return read.model_copy(update={"subtasks_count": counts.total, "completed_subtasks": counts.done})


class TaskService:
    """Service for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TaskRepository(db)
        self.users = UserRepository(db)

    async def list(
        self,
        filters: Optional[TaskFilters] = None,
        pagination: Optional[PageParams] = None,
    ) -> Tuple[List[TaskRead], Pagination]:
        """List tasks newest-first with filters and page metadata."""
        filters = filters or TaskFilters()
        pagination = pagination or PageParams()
        logger.debug("Listing tasks filters=%s page=%s limit=%s", filters, pagination.page, pagination.limit)

        with translate_db_errors("fetching tasks"):
            total = await self.repository.count(filters)
            tasks = await self.repository.list(filters, limit=pagination.limit, offset=pagination.offset)

        return [to_task_read(t) for t in tasks], pagination.describe(total)

    async def list_by_status(self) -> TasksByStatus:
        """All tasks grouped into board columns, each with its subtasks."""
        with translate_db_errors("fetching tasks by status"):
            tasks = await self.repository.list_all()

        buckets = bucket_by_status((to_task_read(t) for t in tasks), lambda t: t.status)
        logger.info(
            "Tasks grouped by status todo=%d in_progress=%d done=%d",
            len(buckets["todo"]),
            len(buckets["in_progress"]),
            len(buckets["done"]),
        )
        return TasksByStatus(**buckets)

    async def get_by_id(self, task_id: int) -> TaskRead:
        """Get a task by ID or raise TaskNotFound."""
        return to_task_read(await self._get_task(task_id))

    async def create(self, data: TaskCreate, created_by: Optional[int]) -> TaskRead:
        """
        Create a task, plus any inline subtasks, for the acting user.

        The new task starts as todo / pending approval. Task and subtasks are
        flushed in the caller's transaction, so a later failure in the
        request leaves nothing behind.
        """
        errors = rules.validate_task_create(data)
        creator_error = (
            FieldError("created_by", "Creating user is required")
            if created_by is None
            else rules.validate_user_id("created_by", created_by)
        )
        if creator_error:
            errors.insert(0, creator_error)
        if errors:
            logger.warning("Task creation validation failed: %s", [e.message for e in errors])
            raise ValidationError(errors)

        values = rules.sanitize_task_create(data)
        subtasks = rules.sanitize_inline_subtasks(data)

        with translate_db_errors("creating task"):
            if not await self.users.get_active(created_by):
                raise ValidationError([FieldError("created_by", "Creating user not found or inactive")])
            await self._require_active_user(values["assigned_to"])
            for subtask in subtasks:
                await self._require_active_user(subtask.get("assigned_to"))

            task_id = await self.repository.create(
                {
                    **values,
                    "created_by": created_by,
                    "status": "todo",
                    "approval_status": "pending",
                },
                subtasks,
            )
            task = await self._get_task(task_id)

        logger.info("Task %s created by user %s with %d subtasks", task_id, created_by, len(subtasks))
        return to_task_read(task)

    async def update(
        self,
        task_id: int,
        data: TaskUpdate | Dict[str, Any],
        actor_id: Optional[int] = None,
    ) -> TaskRead:
        """
        Apply a partial update.

        Any status may replace any other. Moving approval_status to approved
        or rejected stamps the approver (default: the acting user) and the
        approval date; moving it back to pending clears both.
        """
        if not isinstance(data, TaskUpdate):
            data = TaskUpdate.model_validate(data)
        changes = data.model_dump(exclude_unset=True)

        errors = rules.validate_task_update(changes)
        if errors:
            logger.warning("Task %s update validation failed: %s", task_id, [e.message for e in errors])
            raise ValidationError(errors)

        with translate_db_errors("updating task"):
            task = await self._get_task(task_id)

            values = rules.sanitize_task_update(changes)
            if not values:
                logger.warning("Task %s update had no fields", task_id)
                raise NoFieldsProvided()

            self._stamp_approval(values, actor_id)

            if values.get("assigned_to"):
                await self._require_active_user(values["assigned_to"])
            if values.get("approved_by_user_id"):
                await self._require_active_user(
                    values["approved_by_user_id"],
                    message="Approving user not found or inactive",
                )

            await self.repository.update(task, values)
            task = await self._get_task(task_id)

        logger.info("Task %s updated fields=%s", task_id, sorted(values))
        return to_task_read(task)

    async def delete(self, task_id: int) -> None:
        """Delete a task together with its subtasks and their documentation."""
        with translate_db_errors("deleting task"):
            if not await self.repository.exists(task_id):
                logger.warning("Task %s not found for delete", task_id)
                raise TaskNotFound()
            await self.repository.delete(task_id)

        logger.info("Task %s deleted", task_id)

    async def _get_task(self, task_id: int) -> Task:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            logger.warning("Task %s not found", task_id)
            raise TaskNotFound()
        return task

    async def _require_active_user(
        self,
        user_id: Optional[int],
        message: str = "Assigned user not found or inactive",
    ) -> None:
        if user_id and not await self.users.get_active(user_id):
            logger.warning("User %s not found or inactive", user_id)
            raise InvalidAssignee(message)

    @staticmethod
    def _stamp_approval(values: Dict[str, Any], actor_id: Optional[int]) -> None:
        approval_status = values.get("approval_status")
        if approval_status is None:
            return
        if approval_status == "pending":
            values["approved_by_user_id"] = None
            values["approval_date"] = None
            return
        if values.get("approved_by_user_id") is None and actor_id:
            values["approved_by_user_id"] = actor_id
        if values.get("approval_date") is None:
            values["approval_date"] = utc_now_naive()
