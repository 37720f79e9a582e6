"""
Project service.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
import structlog

from tenantgate.models.company import Company, CompanyMember
from tenantgate.models.project import Project
from tenantgate.models.task import Task
from tenantgate.schemas.project import ProjectCreate, ProjectUpdate

logger = structlog.get_logger()


class ProjectService:
    """Project management service."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, project_id: UUID) -> Project | None:
        """Get project by ID, with its tasks and its company's owner and members."""
        stmt = (
            select(Project)
            .where(Project.id == project_id)
            .options(
                selectinload(Project.company).selectinload(Company.owner),
                selectinload(Project.company)
                .selectinload(Company.members)
                .selectinload(CompanyMember.user),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, company_id: UUID, data: ProjectCreate) -> Project | None:
        """
        Create project under a company.

        Returns None if the company disappeared after authorization. The
        company row is held FOR SHARE until the transaction ends.
        """
        stmt = select(Company.id).where(Company.id == company_id).with_for_update(read=True)
        if await self.db.scalar(stmt) is None:
            return None

        project = Project(company_id=company_id, **data.model_dump())
        self.db.add(project)
        await self.db.flush()

        logger.info("project.created", project_id=str(project.id), company_id=str(company_id))
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate) -> Project | None:
        """Update project. Returns None if it no longer exists."""
        project = await self.get_by_id(project_id)
        if not project:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.flush()
        return project

    async def delete(self, project_id: UUID) -> bool:
        """Delete project and its tasks."""
        project = await self.get_by_id(project_id)
        if not project:
            return False

        await self.db.delete(project)
        await self.db.flush()

        logger.info("project.deleted", project_id=str(project_id))
        return True

    async def list_for_company(
        self,
        company_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[tuple[Project, int]], int]:
        """List a company's projects with their task counts."""
        stmt = select(Project).where(Project.company_id == company_id)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = await self.db.scalar(count_stmt) or 0

        stmt = (
            select(Project, func.count(Task.id))
            .outerjoin(Task, Task.project_id == Project.id)
            .where(Project.company_id == company_id)
            .group_by(Project.id)
            .order_by(Project.created_at)
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.db.execute(stmt)
        projects = [(project, count) for project, count in result.all()]

        return projects, total
