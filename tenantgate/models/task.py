"""
Task model.
"""

from enum import Enum
from uuid import UUID
from sqlalchemy import String, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, StandardMixin


class TaskStatus(str, Enum):
    """Task workflow states."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class Task(Base, StandardMixin):
    """Task model. Reaches its company through its project."""

    __tablename__ = "tasks"

    project_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    status: Mapped[TaskStatus] = mapped_column(
        SQLEnum(TaskStatus, name="task_status"),
        default=TaskStatus.TODO,
        nullable=False,
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="tasks",
    )

    def __repr__(self) -> str:
        return f"<Task {self.title}>"


# Import at bottom
from .project import Project
