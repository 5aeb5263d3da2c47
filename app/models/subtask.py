"""
Subtask model.

A checklist item that belongs to exactly one task for its whole life.
"""

from datetime import date
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base_model import WORK_STATUSES, Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.documentation import Documentation
    from app.models.task import Task
    from app.models.user import User


class Subtask(TimestampMixin, Base):
    """
    Subtasks table.
    """

    __tablename__ = "subtasks"

    subtask_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    relation_task_id: Mapped[int] = mapped_column(
        ForeignKey("tasks.task_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subtask_title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtask_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assigned_to: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.user_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    subtask_status: Mapped[str] = mapped_column(
        Enum(*WORK_STATUSES, name="subtask_status"),
        nullable=False,
        default="todo",
    )
    subtask_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    subtask_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Relationships
    task: Mapped["Task"] = relationship("Task", back_populates="subtasks")
    assignee: Mapped[Optional["User"]] = relationship("User", foreign_keys=[assigned_to])
    documentation: Mapped[List["Documentation"]] = relationship(
        "Documentation",
        back_populates="subtask",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Documentation.uploaded_at, Documentation.doc_id]",
    )

    @property
    def assigned_user_name(self) -> Optional[str]:
        return self.assignee.name if self.assignee else None

    @property
    def task_title(self) -> Optional[str]:
        return self.task.title if self.task else None

    @property
    def task_created_by(self) -> Optional[int]:
        return self.task.created_by if self.task else None

    @property
    def task_created_by_name(self) -> Optional[str]:
        return self.task.created_by_name if self.task else None
