"""
Project routes.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, Query

from tenantgate.core.auth import Action, Decision, ResourceType
from tenantgate.schemas.company import CompanySummary
from tenantgate.schemas.project import (
    ProjectUpdate,
    ProjectResponse,
    ProjectDetailResponse,
)
from tenantgate.schemas.task import (
    TaskCreate,
    TaskResponse,
    TaskListResponse,
)
from tenantgate.services.project import ProjectService
from tenantgate.services.task import TaskService
from tenantgate.api.dependencies.services import get_project_service, get_task_service
from tenantgate.api.dependencies.authorization import permissions_for, require_permission

router = APIRouter()


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: UUID,
    project_service: ProjectService = Depends(get_project_service),
    decision: Decision = Depends(
        require_permission(Action.VIEW, ResourceType.PROJECT, "project_id")
    ),
):
    """Get project by ID, with its company (owner and members) and tasks."""
    project = await project_service.get_by_id(project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ProjectDetailResponse(
        **ProjectResponse.model_validate(project).model_dump(),
        company=CompanySummary.model_validate(project.company),
        tasks=[TaskResponse.model_validate(t) for t in project.tasks],
        permissions=permissions_for(decision),
    )


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    project_service: ProjectService = Depends(get_project_service),
    _: Decision = Depends(
        require_permission(Action.UPDATE, ResourceType.PROJECT, "project_id")
    ),
):
    """Update project (owner or editor)."""
    project = await project_service.update(project_id, data)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    project_service: ProjectService = Depends(get_project_service),
    _: Decision = Depends(
        require_permission(Action.DELETE, ResourceType.PROJECT, "project_id")
    ),
):
    """Delete project (owner only)."""
    deleted = await project_service.delete(project_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")


# Tasks
@router.get("/{project_id}/tasks", response_model=TaskListResponse)
async def list_tasks(
    project_id: UUID,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    task_service: TaskService = Depends(get_task_service),
    _: Decision = Depends(
        require_permission(Action.VIEW, ResourceType.PROJECT, "project_id")
    ),
):
    """List tasks of a project."""
    tasks, total = await task_service.list_for_project(
        project_id=project_id,
        page=page,
        per_page=per_page,
    )
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post(
    "/{project_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: UUID,
    data: TaskCreate,
    task_service: TaskService = Depends(get_task_service),
    _: Decision = Depends(
        require_permission(Action.CREATE, ResourceType.PROJECT, "project_id")
    ),
):
    """Create a task in a project (owner or editor)."""
    task = await task_service.create(project_id, data)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return TaskResponse.model_validate(task)
