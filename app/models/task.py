"""
Task model.

Top-level unit of work with an assignee, a priority, a due date and an
approval sub-workflow that is independent of its status.
"""

from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base_model import (
    APPROVAL_STATUSES,
    TASK_PRIORITIES,
    WORK_STATUSES,
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from app.models.subtask import Subtask
    from app.models.user import User


class Task(TimestampMixin, Base):
    """
    Tasks table.
    """

    __tablename__ = "tasks"

    task_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    assigned_to: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.user_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by: Mapped[int] = mapped_column(
        ForeignKey("users.user_id"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        Enum(*WORK_STATUSES, name="task_status"),
        nullable=False,
        default="todo",
        index=True,
    )
    priority: Mapped[str] = mapped_column(
        Enum(*TASK_PRIORITIES, name="task_priority"),
        nullable=False,
        default="medium",
        index=True,
    )
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    approval_status: Mapped[str] = mapped_column(
        Enum(*APPROVAL_STATUSES, name="task_approval_status"),
        nullable=False,
        default="pending",
    )
    approved_by_user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.user_id", ondelete="SET NULL"),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Relationships. Loaded explicitly by the repository; async sessions
    # cannot lazy-load.
    assignee: Mapped[Optional["User"]] = relationship("User", foreign_keys=[assigned_to])
    creator: Mapped[Optional["User"]] = relationship("User", foreign_keys=[created_by])
    approver: Mapped[Optional["User"]] = relationship("User", foreign_keys=[approved_by_user_id])

    subtasks: Mapped[List["Subtask"]] = relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Subtask.created_at, Subtask.subtask_id]",
    )

    @property
    def assigned_user_name(self) -> Optional[str]:
        return self.assignee.name if self.assignee else None

    @property
    def created_by_name(self) -> Optional[str]:
        return self.creator.name if self.creator else None

    @property
    def approved_by_name(self) -> Optional[str]:
        return self.approver.name if self.approver else None
