"""
Task router - API endpoints for tasks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_actor_id, get_db, get_page_params, parse_task_id
from app.schemas.base import MessageResponse, PageParams
from app.schemas.task import (
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TasksByStatusResponse,
    TaskUpdate,
)
from app.services.task_service import TaskService
from app.validation.tasks import parse_task_filters

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(get_page_params),
    status: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[str] = None,
    created_by: Optional[str] = None,
    approval_status: Optional[str] = None,
    search: Optional[str] = None,
):
    """
    List tasks with pagination and filters.
    
    Filters: status, priority, assigned_to, created_by, approval_status,
    search (title or description). Invalid filter values are ignored.
    """
    filters = parse_task_filters(status, priority, assigned_to, created_by, approval_status, search)
    service = TaskService(db)
    tasks, pagination = await service.list(filters, paging)
    return TaskListResponse(message="Tasks retrieved successfully", tasks=tasks, pagination=pagination)


@router.get("/kanban", response_model=TasksByStatusResponse)
async def list_tasks_by_status(db: AsyncSession = Depends(get_db)):
    """Tasks grouped into todo / in_progress / done columns."""
    service = TaskService(db)
    buckets = await service.list_by_status()
    return TasksByStatusResponse(message="Tasks retrieved successfully", tasks=buckets)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int = Depends(parse_task_id),
    db: AsyncSession = Depends(get_db),
):
    """Get a task by ID."""
    service = TaskService(db)
    task = await service.get_by_id(task_id)
    return TaskResponse(message="Task retrieved successfully", task=task)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    actor_id: Optional[int] = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task for the acting user."""
    service = TaskService(db)
    task = await service.create(data, created_by=actor_id)
    return TaskResponse(message="Task created successfully", task=task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    data: TaskUpdate,
    task_id: int = Depends(parse_task_id),
    actor_id: Optional[int] = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Update a task (any subset of fields)."""
    service = TaskService(db)
    task = await service.update(task_id, data, actor_id=actor_id)
    return TaskResponse(message="Task updated successfully", task=task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int = Depends(parse_task_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task with its subtasks and their documentation."""
    service = TaskService(db)
    await service.delete(task_id)
    return MessageResponse(message="Task deleted successfully")
