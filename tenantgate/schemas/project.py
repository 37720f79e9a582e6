"""
Project schemas.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict, field_validator

from tenantgate.core.auth.interfaces import Action
from .company import CompanySummary
from .task import TaskResponse


class ProjectCreate(BaseModel):
    """Project creation schema. The company comes from the path."""
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)


class ProjectUpdate(BaseModel):
    """Project update schema."""
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name may be omitted but not null")
        return v


class ProjectResponse(BaseModel):
    """Project response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ProjectSummary(ProjectResponse):
    """Project as it appears in a company listing."""
    task_count: int = 0


class ProjectDetailResponse(ProjectResponse):
    """Single project with its company, its tasks and the caller's permissions."""
    company: CompanySummary
    tasks: list[TaskResponse] = Field(default_factory=list)
    permissions: list[Action] = Field(default_factory=list)


class ProjectListResponse(BaseModel):
    """Paginated project list response."""
    projects: list[ProjectSummary]
    total: int
    page: int
    per_page: int
