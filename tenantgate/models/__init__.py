"""
Database models.
"""

from .base import (
    Base,
    TimestampMixin,
    UUIDMixin,
    StandardMixin,
    utc_now,
)
from .user import User
from .company import Company, CompanyMember
from .project import Project
from .task import Task, TaskStatus

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "StandardMixin",
    "utc_now",
    # Models
    "User",
    "Company",
    "CompanyMember",
    "Project",
    "Task",
    "TaskStatus",
]
