"""
Documentation (attachment) Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DocumentationRead(BaseModel):
    """Attachment row as shown under a subtask."""
    
    doc_id: int
    subtask_id: int
    doc_type: str
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    uploaded_by: Optional[int] = None
    uploaded_at: datetime
    
    model_config = ConfigDict(from_attributes=True)
