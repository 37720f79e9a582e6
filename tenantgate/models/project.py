"""
Project model.
"""

from uuid import UUID
from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, StandardMixin


class Project(Base, StandardMixin):
    """Project model. Belongs to exactly one company, never moved."""

    __tablename__ = "projects"

    company_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Relationships
    company: Mapped["Company"] = relationship("Company")
    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="project",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Task.created_at",
    )

    def __repr__(self) -> str:
        return f"<Project {self.name}>"


# Import at bottom
from .company import Company
from .task import Task
