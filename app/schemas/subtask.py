"""
Subtask Pydantic schemas.

Request schemas only enforce JSON types; field rules (lengths, enums, date
format) are checked by app.validation.subtasks so that every violation is
reported in one response.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import ApiResponse, Pagination
from app.schemas.documentation import DocumentationRead


class SubtaskFields(BaseModel):
    """Fields a client may supply when creating a subtask."""
    
    subtask_title: Optional[str] = None
    subtask_description: Optional[str] = None
    assigned_to: Optional[int] = None
    subtask_date: Optional[str] = None


class SubtaskCreate(SubtaskFields):
    """Schema for creating a subtask under an existing task."""
    
    relation_task_id: Optional[int] = None


class SubtaskUpdate(BaseModel):
    """Schema for a partial subtask update. The parent task cannot change."""
    
    subtask_title: Optional[str] = None
    subtask_description: Optional[str] = None
    assigned_to: Optional[int] = None
    subtask_status: Optional[str] = None
    subtask_comment: Optional[str] = None
    subtask_date: Optional[str] = None


class SubtaskFilters(BaseModel):
    """Already-validated filters for subtask listings."""
    
    relation_task_id: Optional[int] = None
    subtask_status: Optional[str] = None
    assigned_to: Optional[int] = None
    search: Optional[str] = None


class SubtaskRead(BaseModel):
    """Subtask with resolved names and parent task details."""
    
    subtask_id: int
    relation_task_id: int
    subtask_title: str
    subtask_description: Optional[str] = None
    assigned_to: Optional[int] = None
    assigned_user_name: Optional[str] = None
    subtask_status: str
    subtask_comment: Optional[str] = None
    subtask_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    task_title: Optional[str] = None
    task_created_by: Optional[int] = None
    task_created_by_name: Optional[str] = None
    documentation: List[DocumentationRead] = Field(default_factory=list)
    
    model_config = ConfigDict(from_attributes=True)


class TaskInfo(BaseModel):
    """Parent task header returned with a task's subtasks."""
    
    task_id: int
    title: str
    status: str
    created_by_name: Optional[str] = None
    
    model_config = ConfigDict(from_attributes=True)


class SubtasksByStatus(BaseModel):
    todo: List[SubtaskRead] = Field(default_factory=list)
    in_progress: List[SubtaskRead] = Field(default_factory=list)
    done: List[SubtaskRead] = Field(default_factory=list)


class ProgressSummary(BaseModel):
    """Completion figures for one task that has at least one subtask."""
    
    task_id: int
    task_title: str
    total_subtasks: int
    completed_subtasks: int
    in_progress_subtasks: int
    todo_subtasks: int
    completion_percentage: float


class SubtaskResponse(ApiResponse):
    subtask: SubtaskRead


class SubtaskListResponse(ApiResponse):
    subtasks: List[SubtaskRead]
    pagination: Pagination


class SubtasksByTaskResponse(ApiResponse):
    subtasks: List[SubtaskRead]
    task_info: TaskInfo


class SubtasksByStatusResponse(ApiResponse):
    subtasks: SubtasksByStatus


class ProgressResponse(ApiResponse):
    progress: List[ProgressSummary]
