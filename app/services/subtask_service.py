"""
Subtask business logic service.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    InvalidAssignee,
    InvalidTaskId,
    NoFieldsProvided,
    SubtaskNotFound,
    TaskNotFound,
    ValidationError,
    translate_db_errors,
)
from app.models.subtask import Subtask
from app.repositories.subtask_repository import SubtaskRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.schemas.base import PageParams, Pagination
from app.schemas.subtask import (
    ProgressSummary,
    SubtaskCreate,
    SubtaskFilters,
    SubtaskRead,
    SubtasksByStatus,
    SubtaskUpdate,
    TaskInfo,
)
from app.services.progress import bucket_by_status, build_progress_summary
from app.validation import subtasks as rules

logger = logging.getLogger(__name__)


class SubtaskService:
    """Service for subtask business logic, always scoped to a parent task."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = SubtaskRepository(db)
        self.tasks = TaskRepository(db)
        self.users = UserRepository(db)

    async def list(
        self,
        filters: Optional[SubtaskFilters] = None,
        pagination: Optional[PageParams] = None,
    ) -> Tuple[List[SubtaskRead], Pagination]:
        filters = filters or SubtaskFilters()
        pagination = pagination or PageParams()

        with translate_db_errors("fetching subtasks"):
            total = await self.repository.count(filters)
            subtasks = await self.repository.list(filters, limit=pagination.limit, offset=pagination.offset)

        return [SubtaskRead.model_validate(s) for s in subtasks], pagination.describe(total)

    async def list_by_task(self, task_id: int) -> Tuple[List[SubtaskRead], TaskInfo]:
        """
        Subtasks of one task, newest-first, with the task's header.

        A missing task is an error (TaskNotFound), never an empty list.
        """
        with translate_db_errors("fetching subtasks for task"):
            task = await self.tasks.get_by_id(task_id)
            if task is None:
                logger.warning("Task %s not found when listing subtasks", task_id)
                raise TaskNotFound()
            subtasks = await self.repository.list_by_task(task_id)

        return [SubtaskRead.model_validate(s) for s in subtasks], TaskInfo.model_validate(task)

    async def list_by_status(self) -> SubtasksByStatus:
        """All subtasks across tasks grouped into board columns."""
        with translate_db_errors("fetching subtasks by status"):
            subtasks = await self.repository.list_all()

        reads = (SubtaskRead.model_validate(s) for s in subtasks)
        return SubtasksByStatus(**bucket_by_status(reads, lambda s: s.subtask_status))

    async def get_by_id(self, subtask_id: int) -> SubtaskRead:
        return SubtaskRead.model_validate(await self._get_subtask(subtask_id))

    async def create(self, data: SubtaskCreate) -> SubtaskRead:
        """
        Create a subtask under an existing task.

        The parent reference is checked here, once; it can never be changed
        afterwards. New subtasks start as todo.
        """
        errors = rules.validate_subtask_create(data)
        if errors:
            logger.warning("Subtask creation validation failed: %s", [e.message for e in errors])
            raise ValidationError(errors)

        values = rules.sanitize_subtask_fields(data.model_dump(exclude_unset=True))

        with translate_db_errors("creating subtask"):
            if not await self.tasks.exists(data.relation_task_id):
                logger.warning("Parent task %s not found for new subtask", data.relation_task_id)
                raise InvalidTaskId()
            await self._require_active_user(values.get("assigned_to"))

            subtask_id = await self.repository.create({**values, "subtask_status": "todo"})
            subtask = await self._get_subtask(subtask_id)

        logger.info("Subtask %s created under task %s", subtask_id, data.relation_task_id)
        return SubtaskRead.model_validate(subtask)

    async def update(self, subtask_id: int, data: SubtaskUpdate | Dict[str, Any]) -> SubtaskRead:
        """Apply a partial update. Any status may replace any other."""
        if not isinstance(data, SubtaskUpdate):
            data = SubtaskUpdate.model_validate(data)
        changes = data.model_dump(exclude_unset=True)

        errors = rules.validate_subtask_update(changes)
        if errors:
            logger.warning("Subtask %s update validation failed: %s", subtask_id, [e.message for e in errors])
            raise ValidationError(errors)

        with translate_db_errors("updating subtask"):
            subtask = await self._get_subtask(subtask_id)

            values = rules.sanitize_subtask_fields(changes)
            if not values:
                logger.warning("Subtask %s update had no fields", subtask_id)
                raise NoFieldsProvided()

            await self._require_active_user(values.get("assigned_to"))

            await self.repository.update(subtask, values)
            subtask = await self._get_subtask(subtask_id)

        logger.info("Subtask %s updated fields=%s", subtask_id, sorted(values))
        return SubtaskRead.model_validate(subtask)

    async def delete(self, subtask_id: int) -> None:
        """Delete a subtask and its documentation."""
        with translate_db_errors("deleting subtask"):
            await self._get_subtask(subtask_id)
            await self.repository.delete(subtask_id)

        logger.info("Subtask %s deleted", subtask_id)

    async def progress_summary(self) -> List[ProgressSummary]:
        """Completion per task; tasks without subtasks are left out."""
        with translate_db_errors("fetching subtasks progress"):
            rows = await self.repository.progress_rows()

        return [ProgressSummary(**item) for item in build_progress_summary(rows)]

    async def _get_subtask(self, subtask_id: int) -> Subtask:
        subtask = await self.repository.get_by_id(subtask_id)
        if subtask is None:
            logger.warning("Subtask %s not found", subtask_id)
            raise SubtaskNotFound()
        return subtask

    async def _require_active_user(self, user_id: Optional[int]) -> None:
        if user_id and not await self.users.get_active(user_id):
            logger.warning("User %s not found or inactive", user_id)
            raise InvalidAssignee()
