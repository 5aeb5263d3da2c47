"""
Dashboard Pydantic schemas.
"""

from pydantic import BaseModel

from app.schemas.base import ApiResponse


class DashboardStats(BaseModel):
    total_users: int
    active_users: int
    active_tasks: int
    completed_tasks: int
    pending_approvals: int


class DashboardStatsResponse(ApiResponse):
    stats: DashboardStats
