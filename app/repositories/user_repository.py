"""
User repository - directory lookups used by the task workflow.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserRepository:
    """Repository for User database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_active(self, user_id: int) -> Optional[User]:
        """Get a user by ID only if the account is active."""
        result = await self.db.execute(
            select(User).where(
                User.user_id == user_id,
                User.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()
    
    async def count(self, active_only: bool = False) -> int:
        query = select(func.count()).select_from(User)
        if active_only:
            query = query.where(User.is_active.is_(True))
        result = await self.db.execute(query)
        return int(result.scalar_one())
