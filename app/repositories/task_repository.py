"""
Task repository - database operations for Task.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from app.models.documentation import Documentation
from app.models.subtask import Subtask
from app.models.task import Task
from app.schemas.task import TaskFilters
from app.utils.time import utc_now_naive


def _with_relations(query: Select) -> Select:
    """Eager-load everything a task read needs."""
    return query.options(
        selectinload(Task.assignee),
        selectinload(Task.creator),
        selectinload(Task.approver),
        selectinload(Task.subtasks).selectinload(Subtask.assignee),
        selectinload(Task.subtasks).selectinload(Subtask.documentation),
    )


def _apply_filters(query: Select, filters: TaskFilters) -> Select:
    if filters.status is not None:
        query = query.where(Task.status == filters.status)
    if filters.priority is not None:
        query = query.where(Task.priority == filters.priority)
    if filters.assigned_to is not None:
        query = query.where(Task.assigned_to == filters.assigned_to)
    if filters.created_by is not None:
        query = query.where(Task.created_by == filters.created_by)
    if filters.approval_status is not None:
        query = query.where(Task.approval_status == filters.approval_status)
    if filters.search:
        term = filters.search.lower()
        query = query.where(
            or_(
                func.lower(Task.title).contains(term, autoescape=True),
                func.lower(Task.description).contains(term, autoescape=True),
            )
        )
    return query


class TaskRepository:
    """Repository for Task database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list(
        self,
        filters: TaskFilters,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Task]:
        """List tasks newest-first with filters."""
        query = _apply_filters(_with_relations(select(Task)), filters)
        query = query.order_by(Task.created_at.desc(), Task.task_id.desc()).limit(limit).offset(offset)
        
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def count(self, filters: TaskFilters) -> int:
        query = _apply_filters(select(func.count()).select_from(Task), filters)
        result = await self.db.execute(query)
        return int(result.scalar_one())
    
    async def list_all(self) -> List[Task]:
        """Every task with its subtasks, newest-first (board view)."""
        query = _with_relations(select(Task)).order_by(Task.created_at.desc(), Task.task_id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def get_by_id(self, task_id: int) -> Optional[Task]:
        """Get a task by ID with fresh relations."""
        result = await self.db.execute(
            _with_relations(select(Task).where(Task.task_id == task_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    async def exists(self, task_id: int) -> bool:
        result = await self.db.execute(
            select(Task.task_id).where(Task.task_id == task_id)
        )
        return result.scalar_one_or_none() is not None
    
    async def create(self, values: Dict[str, Any], subtasks: List[Dict[str, Any]]) -> int:
        """
        Insert a task and its inline subtasks in the current transaction.

        Returns the new task id.
        """
        task = Task(**values)
        self.db.add(task)
        await self.db.flush()
        
        for subtask_values in subtasks:
            self.db.add(Subtask(relation_task_id=task.task_id, **subtask_values))
        if subtasks:
            await self.db.flush()
        return task.task_id
    
    async def update(self, task: Task, values: Dict[str, Any]) -> None:
        """Apply column values and bump updated_at."""
        for field, value in values.items():
            setattr(task, field, value)
        
        task.updated_at = utc_now_naive()
        await self.db.flush()
    
    async def delete(self, task_id: int) -> None:
        """Delete a task, its subtasks and their documentation."""
        subtask_ids = select(Subtask.subtask_id).where(Subtask.relation_task_id == task_id)
        await self.db.execute(
            delete(Documentation)
            .where(Documentation.subtask_id.in_(subtask_ids))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(Subtask)
            .where(Subtask.relation_task_id == task_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(Task)
            .where(Task.task_id == task_id)
            .execution_options(synchronize_session=False)
        )
        self.db.expunge_all()
    
    async def count_by_status(self) -> Dict[str, int]:
        result = await self.db.execute(
            select(Task.status, func.count()).group_by(Task.status)
        )
        return {status: int(total) for status, total in result.all()}
    
    async def count_pending_approvals(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Task).where(Task.approval_status == "pending")
        )
        return int(result.scalar_one())
