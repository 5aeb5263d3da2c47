"""
Task Pydantic schemas.

Request schemas only enforce JSON types; field rules live in
app.validation.tasks.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import ApiResponse, Pagination
from app.schemas.documentation import DocumentationRead
from app.schemas.subtask import SubtaskFields


class TaskCreate(BaseModel):
    """Schema for creating a task, optionally with its first subtasks."""
    
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    subtasks: List[SubtaskFields] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    """Schema for a partial task update, including approval fields."""
    
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    approval_status: Optional[str] = None
    approved_by_user_id: Optional[int] = None
    approval_date: Optional[str] = None


class TaskFilters(BaseModel):
    """Already-validated filters for task listings."""
    
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    approval_status: Optional[str] = None
    search: Optional[str] = None


class TaskSubtaskRead(BaseModel):
    """Subtask as embedded in a task (no parent details)."""
    
    subtask_id: int
    subtask_title: str
    subtask_status: str
    assigned_to: Optional[int] = None
    assigned_user_name: Optional[str] = None
    subtask_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    documentation: List[DocumentationRead] = Field(default_factory=list)
    
    model_config = ConfigDict(from_attributes=True)


class TaskRead(BaseModel):
    """Task with resolved user names, subtasks and progress counts."""
    
    task_id: int
    title: str
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    assigned_user_name: Optional[str] = None
    created_by: int
    created_by_name: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[date] = None
    approval_status: str
    approved_by_user_id: Optional[int] = None
    approved_by_name: Optional[str] = None
    approval_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    subtasks: List[TaskSubtaskRead] = Field(default_factory=list)
    subtasks_count: int = 0
    completed_subtasks: int = 0
    
    model_config = ConfigDict(from_attributes=True)


class TasksByStatus(BaseModel):
    todo: List[TaskRead] = Field(default_factory=list)
    in_progress: List[TaskRead] = Field(default_factory=list)
    done: List[TaskRead] = Field(default_factory=list)


class TaskResponse(ApiResponse):
    task: TaskRead


class TaskListResponse(ApiResponse):
    tasks: List[TaskRead]
    pagination: Pagination


class TasksByStatusResponse(ApiResponse):
    tasks: TasksByStatus
