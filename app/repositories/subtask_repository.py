"""
Subtask repository - database operations for Subtask.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from app.models.documentation import Documentation
from app.models.subtask import Subtask
from app.models.task import Task
from app.schemas.subtask import SubtaskFilters
from app.utils.time import utc_now_naive


def _with_relations(query: Select) -> Select:
    """Eager-load assignee, attachments and the parent task's creator."""
    return query.options(
        selectinload(Subtask.assignee),
        selectinload(Subtask.documentation),
        selectinload(Subtask.task).selectinload(Task.creator),
    )


def _apply_filters(query: Select, filters: SubtaskFilters) -> Select:
    if filters.relation_task_id is not None:
        query = query.where(Subtask.relation_task_id == filters.relation_task_id)
    if filters.subtask_status is not None:
        query = query.where(Subtask.subtask_status == filters.subtask_status)
    if filters.assigned_to is not None:
        query = query.where(Subtask.assigned_to == filters.assigned_to)
    if filters.search:
        term = filters.search.lower()
        query = query.where(
            or_(
                func.lower(Subtask.subtask_title).contains(term, autoescape=True),
                func.lower(Subtask.subtask_description).contains(term, autoescape=True),
            )
        )
    return query


def _newest_first(query: Select) -> Select:
    return query.order_by(Subtask.created_at.desc(), Subtask.subtask_id.desc())


class SubtaskRepository:
    """Repository for Subtask database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def list(
        self,
        filters: SubtaskFilters,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Subtask]:
        query = _newest_first(_apply_filters(_with_relations(select(Subtask)), filters))
        result = await self.db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all())
    
    async def count(self, filters: SubtaskFilters) -> int:
        query = _apply_filters(select(func.count()).select_from(Subtask), filters)
        result = await self.db.execute(query)
        return int(result.scalar_one())
    
    async def list_by_task(self, task_id: int) -> List[Subtask]:
        query = _newest_first(
            _with_relations(select(Subtask)).where(Subtask.relation_task_id == task_id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def list_all(self) -> List[Subtask]:
        result = await self.db.execute(_newest_first(_with_relations(select(Subtask))))
        return list(result.scalars().all())
    
    async def get_by_id(self, subtask_id: int) -> Optional[Subtask]:
        result = await self.db.execute(
            _with_relations(select(Subtask).where(Subtask.subtask_id == subtask_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    async def create(self, values: Dict[str, Any]) -> int:
        subtask = Subtask(**values)
        self.db.add(subtask)
        await self.db.flush()
        return subtask.subtask_id
    
    async def update(self, subtask: Subtask, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(subtask, field, value)
        
        subtask.updated_at = utc_now_naive()
        await self.db.flush()
    
    async def delete(self, subtask_id: int) -> None:
        """Delete a subtask and its documentation."""
        await self.db.execute(
            delete(Documentation)
            .where(Documentation.subtask_id == subtask_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(Subtask)
            .where(Subtask.subtask_id == subtask_id)
            .execution_options(synchronize_session=False)
        )
        self.db.expunge_all()
    
    async def progress_rows(self) -> List[Tuple[int, str, Any, str]]:
        """
        One (task_id, title, task created_at, subtask_status) row per subtask.

        The inner join leaves out tasks without subtasks.
        """
        result = await self.db.execute(
            select(Task.task_id, Task.title, Task.created_at, Subtask.subtask_status)
            .join(Subtask, Subtask.relation_task_id == Task.task_id)
        )
        return [tuple(row) for row in result.all()]
