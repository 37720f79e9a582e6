"""
Service dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from tenantgate.services.project import ProjectService
from tenantgate.services.task import TaskService


async def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    """Get project service instance."""
    return ProjectService(db)


async def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    """Get task service instance."""
    return TaskService(db)
