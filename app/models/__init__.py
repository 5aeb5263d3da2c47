"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.base_model import Base
from app.models.user import User
from app.models.task import Task
from app.models.subtask import Subtask
from app.models.documentation import Documentation

# Export all models
__all__ = [
    "Base",
    "User",
    "Task",
    "Subtask",
    "Documentation",
]
