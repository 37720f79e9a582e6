"""
SQLAlchemy tenancy store.

Reads through the request's AsyncSession, so an authorization decision and
the mutation it gates run in the same transaction.
"""

from __future__ import annotations

import asyncio
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantgate.core.auth.errors import StoreUnavailableError
from tenantgate.core.auth.interfaces import ResourceType
from tenantgate.core.interfaces.tenancy import TenancySnapshot
from tenantgate.models.company import Company, CompanyMember
from tenantgate.models.project import Project
from tenantgate.models.task import Task

logger = structlog.get_logger()


class SqlAlchemyTenancyStore:
    """
    Tenancy store backed by the application database.

    The snapshot is ONE statement: companies LEFT OUTER JOIN the caller's
    membership row. Existence, ownership and role are observed together,
    never by two reads that a concurrent role change could fall between.

    Reads are bounded by the driver's statement timeout (DB_COMMAND_TIMEOUT);
    a read that hits it counts as unavailable.

    Configuration:
        session: Request-scoped AsyncSession
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def read_tenancy_snapshot(
        self,
        user_id: UUID,
        company_id: UUID,
    ) -> TenancySnapshot:
        stmt = (
            select(Company.id, Company.owner_id, CompanyMember.role)
            .outerjoin(
                CompanyMember,
                and_(
                    CompanyMember.company_id == Company.id,
                    CompanyMember.user_id == user_id,
                ),
            )
            .where(Company.id == company_id)
        )
        result = await self._execute(stmt)
        row = result.one_or_none()

        if row is None:
            return TenancySnapshot.missing()

        return TenancySnapshot(
            company_exists=True,
            owner_id=row.owner_id,
            membership_role=row.role,
        )

    async def read_resource_chain(
        self,
        resource_type: ResourceType,
        resource_id: UUID,
    ) -> UUID | None:
        if resource_type == ResourceType.COMPANY:
            stmt = select(Company.id).where(Company.id == resource_id)
        elif resource_type == ResourceType.PROJECT:
            stmt = select(Project.company_id).where(Project.id == resource_id)
        elif resource_type == ResourceType.TASK:
            stmt = (
                select(Project.company_id)
                .select_from(Task)
                .join(Project, Project.id == Task.project_id)
                .where(Task.id == resource_id)
            )
        else:
            raise ValueError(f"Unsupported resource type: {resource_type}")

        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self.session.execute(stmt)
        except asyncio.TimeoutError as exc:
            # asyncpg command_timeout
            logger.warning("tenancy_store.timeout")
            raise StoreUnavailableError("Tenancy read timed out") from exc
        except SQLAlchemyError as exc:
            logger.warning("tenancy_store.error", error=str(exc))
            raise StoreUnavailableError("Tenancy store could not be read") from exc
