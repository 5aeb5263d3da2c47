"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.base import ApiResponse, MessageResponse, PageParams, Pagination
from app.schemas.dashboard import DashboardStats, DashboardStatsResponse
from app.schemas.documentation import DocumentationRead
from app.schemas.subtask import (
    ProgressResponse,
    ProgressSummary,
    SubtaskCreate,
    SubtaskFilters,
    SubtaskListResponse,
    SubtaskRead,
    SubtaskResponse,
    SubtasksByStatus,
    SubtasksByStatusResponse,
    SubtasksByTaskResponse,
    SubtaskUpdate,
    TaskInfo,
)
from app.schemas.task import (
    TaskCreate,
    TaskFilters,
    TaskListResponse,
    TaskRead,
    TaskResponse,
    TasksByStatus,
    TasksByStatusResponse,
    TaskSubtaskRead,
    TaskUpdate,
)

__all__ = [
    "ApiResponse",
    "MessageResponse",
    "PageParams",
    "Pagination",
    "DashboardStats",
    "DashboardStatsResponse",
    "DocumentationRead",
    "ProgressResponse",
    "ProgressSummary",
    "SubtaskCreate",
    "SubtaskFilters",
    "SubtaskListResponse",
    "SubtaskRead",
    "SubtaskResponse",
    "SubtasksByStatus",
    "SubtasksByStatusResponse",
    "SubtasksByTaskResponse",
    "SubtaskUpdate",
    "TaskInfo",
    "TaskCreate",
    "TaskFilters",
    "TaskListResponse",
    "TaskRead",
    "TaskResponse",
    "TasksByStatus",
    "TasksByStatusResponse",
    "TaskSubtaskRead",
    "TaskUpdate",
]
