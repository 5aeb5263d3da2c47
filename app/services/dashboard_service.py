"""
Dashboard counters.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import translate_db_errors
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.schemas.dashboard import DashboardStats


class DashboardService:
    """Headline numbers for the admin dashboard."""

    def __init__(self, db: AsyncSession):
        self.tasks = TaskRepository(db)
        self.users = UserRepository(db)

    async def get_stats(self) -> DashboardStats:
        with translate_db_errors("fetching dashboard stats"):
            by_status = await self.tasks.count_by_status()
            return DashboardStats(
                total_users=await self.users.count(),
                active_users=await self.users.count(active_only=True),
                active_tasks=sum(n for status, n in by_status.items() if status != "done"),
                completed_tasks=by_status.get("done", 0),
                pending_approvals=await self.tasks.count_pending_approvals(),
            )
