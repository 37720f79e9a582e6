"""
Company-scoped project routes.

Listing and creating under a company hide the company from non-members:
both answer 404, not 403.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, Query

from tenantgate.core.auth import Action, Decision, ResourceType
from tenantgate.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectSummary,
    ProjectListResponse,
)
from tenantgate.services.project import ProjectService
from tenantgate.api.dependencies.services import get_project_service
from tenantgate.api.dependencies.authorization import require_listing, require_permission

router = APIRouter()


@router.get("/{company_id}/projects", response_model=ProjectListResponse)
async def list_projects(
    company_id: UUID,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    project_service: ProjectService = Depends(get_project_service),
    _: Decision = Depends(require_listing("company_id")),
):
    """List all projects of a company (any member may list)."""
    rows, total = await project_service.list_for_company(
        company_id=company_id,
        page=page,
        per_page=per_page,
    )
    return ProjectListResponse(
        projects=[
            ProjectSummary.model_validate(project).model_copy(update={"task_count": count})
            for project, count in rows
        ],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post(
    "/{company_id}/projects",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    company_id: UUID,
    data: ProjectCreate,
    project_service: ProjectService = Depends(get_project_service),
    decision: Decision = Depends(
        require_permission(Action.CREATE, ResourceType.COMPANY, "company_id")
    ),
):
    """Create a project in a company (owner or editor)."""
    project = await project_service.create(decision.company_id, data)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return ProjectResponse.model_validate(project)
