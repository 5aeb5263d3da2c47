"""
Documentation model.

A file reference attached to a subtask. Only the row is modelled here; the
file itself lives in external storage.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base_model import Base
from app.utils.time import utc_now_naive

if TYPE_CHECKING:
    from app.models.subtask import Subtask


DOCUMENT_TYPES = ("documentation", "payment", "attendance")


class Documentation(Base):
    """
    Documentation table - attachments of a subtask.
    """

    __tablename__ = "documentation"

    doc_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subtask_id: Mapped[int] = mapped_column(
        ForeignKey("subtasks.subtask_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    doc_type: Mapped[str] = mapped_column(
        Enum(*DOCUMENT_TYPES, name="doc_type"),
        nullable=False,
        default="documentation",
    )
    file_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    uploaded_by: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.user_id", ondelete="SET NULL"),
        nullable=True,
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now_naive,
    )

    subtask: Mapped["Subtask"] = relationship("Subtask", back_populates="documentation")
