"""
Task schemas.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict, field_validator

from tenantgate.core.auth.interfaces import Action
from tenantgate.models.task import TaskStatus


class TaskCreate(BaseModel):
    """Task creation schema."""
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    status: TaskStatus = TaskStatus.TODO


class TaskUpdate(BaseModel):
    """Task update schema."""
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    status: TaskStatus | None = None

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may be omitted but not null")
        return v


class TaskResponse(BaseModel):
    """Task response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    title: str
    description: str | None = None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


class TaskDetailResponse(TaskResponse):
    """Single task with the caller's permissions on it."""
    permissions: list[Action] = Field(default_factory=list)


class TaskListResponse(BaseModel):
    """Paginated task list response."""
    tasks: list[TaskResponse]
    total: int
    page: int
    per_page: int
