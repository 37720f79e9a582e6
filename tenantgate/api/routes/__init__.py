"""
API routes aggregation.
"""

from fastapi import APIRouter

from .companies import router as companies_router
from .projects import router as projects_router
from .tasks import router as tasks_router

router = APIRouter()

router.include_router(companies_router, prefix="/companies", tags=["companies"])
router.include_router(projects_router, prefix="/projects", tags=["projects"])
router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
