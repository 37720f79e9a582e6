"""
Task service.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
import structlog

from tenantgate.models.project import Project
from tenantgate.models.task import Task
from tenantgate.schemas.task import TaskCreate, TaskUpdate

logger = structlog.get_logger()


class TaskService:
    """Task management service."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, task_id: UUID) -> Task | None:
        """Get task by ID."""
        stmt = select(Task).where(Task.id == task_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, project_id: UUID, data: TaskCreate) -> Task | None:
        """Create task in a project. Returns None if the project is gone."""
        stmt = select(Project.id).where(Project.id == project_id).with_for_update(read=True)
        if await self.db.scalar(stmt) is None:
            return None

        task = Task(project_id=project_id, **data.model_dump())
        self.db.add(task)
        await self.db.flush()

        logger.info("task.created", task_id=str(task.id), project_id=str(project_id))
        return task

    async def update(self, task_id: UUID, data: TaskUpdate) -> Task | None:
        """Update task. Returns None if it no longer exists."""
        task = await self.get_by_id(task_id)
        if not task:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(task, field, value)

        await self.db.flush()
        return task

    async def delete(self, task_id: UUID) -> bool:
        """Delete task."""
        task = await self.get_by_id(task_id)
        if not task:
            return False

        await self.db.delete(task)
        await self.db.flush()

        logger.info("task.deleted", task_id=str(task_id))
        return True

    async def list_for_project(
        self,
        project_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[Task], int]:
        """List tasks of a project."""
        stmt = select(Task).where(Task.project_id == project_id)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = await self.db.scalar(count_stmt) or 0

        stmt = (
            stmt.order_by(Task.created_at)
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.db.execute(stmt)
        tasks = list(result.scalars().all())

        return tasks, total
