"""
Subtask router - API endpoints for subtasks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_page_params, parse_subtask_id, parse_task_id
from app.schemas.base import MessageResponse, PageParams
from app.schemas.subtask import (
    ProgressResponse,
    SubtaskCreate,
    SubtaskListResponse,
    SubtaskResponse,
    SubtasksByStatusResponse,
    SubtasksByTaskResponse,
    SubtaskUpdate,
)
from app.services.subtask_service import SubtaskService
from app.validation.subtasks import parse_subtask_filters

router = APIRouter(prefix="/api/subtasks", tags=["subtasks"])


@router.get("", response_model=SubtaskListResponse)
async def list_subtasks(
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(get_page_params),
    relation_task_id: Optional[str] = None,
    subtask_status: Optional[str] = None,
    assigned_to: Optional[str] = None,
    search: Optional[str] = None,
):
    """List subtasks with pagination and filters."""
    filters = parse_subtask_filters(relation_task_id, subtask_status, assigned_to, search)
    service = SubtaskService(db)
    subtasks, pagination = await service.list(filters, paging)
    return SubtaskListResponse(
        message="Subtasks retrieved successfully",
        subtasks=subtasks,
        pagination=pagination,
    )


@router.get("/kanban", response_model=SubtasksByStatusResponse)
async def list_subtasks_by_status(db: AsyncSession = Depends(get_db)):
    """All subtasks grouped into todo / in_progress / done."""
    service = SubtaskService(db)
    buckets = await service.list_by_status()
    return SubtasksByStatusResponse(message="Subtasks retrieved successfully", subtasks=buckets)


@router.get("/progress", response_model=ProgressResponse)
async def subtasks_progress(db: AsyncSession = Depends(get_db)):
    """Completion percentage per task that has subtasks."""
    service = SubtaskService(db)
    progress = await service.progress_summary()
    return ProgressResponse(message="Subtasks progress retrieved successfully", progress=progress)


@router.get("/by-task/{task_id}", response_model=SubtasksByTaskResponse)
async def list_subtasks_by_task(
    task_id: int = Depends(parse_task_id),
    db: AsyncSession = Depends(get_db),
):
    """Subtasks of one task, newest first."""
    service = SubtaskService(db)
    subtasks, task_info = await service.list_by_task(task_id)
    return SubtasksByTaskResponse(
        message="Subtasks retrieved successfully",
        subtasks=subtasks,
        task_info=task_info,
    )


@router.get("/{subtask_id}", response_model=SubtaskResponse)
async def get_subtask(
    subtask_id: int = Depends(parse_subtask_id),
    db: AsyncSession = Depends(get_db),
):
    service = SubtaskService(db)
    subtask = await service.get_by_id(subtask_id)
    return SubtaskResponse(message="Subtask retrieved successfully", subtask=subtask)


@router.post("", response_model=SubtaskResponse, status_code=status.HTTP_201_CREATED)
async def create_subtask(
    data: SubtaskCreate,
    db: AsyncSession = Depends(get_db),
):
    service = SubtaskService(db)
    subtask = await service.create(data)
    return SubtaskResponse(message="Subtask created successfully", subtask=subtask)


@router.put("/{subtask_id}", response_model=SubtaskResponse)
async def update_subtask(
    data: SubtaskUpdate,
    subtask_id: int = Depends(parse_subtask_id),
    db: AsyncSession = Depends(get_db),
):
    service = SubtaskService(db)
    subtask = await service.update(subtask_id, data)
    return SubtaskResponse(message="Subtask updated successfully", subtask=subtask)


@router.delete("/{subtask_id}", response_model=MessageResponse)
async def delete_subtask(
    subtask_id: int = Depends(parse_subtask_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a subtask and its documentation."""
    service = SubtaskService(db)
    await service.delete(subtask_id)
    return MessageResponse(message="Subtask deleted successfully")
