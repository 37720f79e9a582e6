"""
Task routes.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status

from tenantgate.core.auth import Action, Decision, ResourceType
from tenantgate.schemas.task import (
    TaskUpdate,
    TaskResponse,
    TaskDetailResponse,
)
from tenantgate.services.task import TaskService
from tenantgate.api.dependencies.services import get_task_service
from tenantgate.api.dependencies.authorization import permissions_for, require_permission

router = APIRouter()


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
    decision: Decision = Depends(
        require_permission(Action.VIEW, ResourceType.TASK, "task_id")
    ),
):
    """Get task by ID."""
    task = await task_service.get_by_id(task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskDetailResponse(
        **TaskResponse.model_validate(task).model_dump(),
        permissions=permissions_for(decision),
    )


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    task_service: TaskService = Depends(get_task_service),
    _: Decision = Depends(
        require_permission(Action.UPDATE, ResourceType.TASK, "task_id")
    ),
):
    """Update task (owner or editor)."""
    task = await task_service.update(task_id, data)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
    _: Decision = Depends(
        require_permission(Action.DELETE, ResourceType.TASK, "task_id")
    ),
):
    """Delete task (owner only)."""
    deleted = await task_service.delete(task_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
