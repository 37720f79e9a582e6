"""
In-memory tenancy store for development and testing.
"""

from __future__ import annotations

import asyncio
from typing import Any
from uuid import UUID

from tenantgate.core.auth.interfaces import CompanyRole, ResourceType
from tenantgate.core.interfaces.tenancy import TenancySnapshot


class MemoryTenancyStore:
    """
    In-memory tenancy store.

    Note: Not suitable for production or multi-process deployments.
    Data is not persisted and not shared between processes.

    Reads and writes share one asyncio.Lock, so a snapshot never sees a
    half-applied change.

    Usage:
        store = MemoryTenancyStore()
        await store.add_company(company_id, owner_id=alice)
        await store.set_member(company_id, bob, CompanyRole.EDITOR)
        await store.add_project(project_id, company_id)
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._owners: dict[UUID, UUID] = {}
        self._members: dict[tuple[UUID, UUID], Any] = {}
        self._projects: dict[UUID, UUID] = {}
        self._tasks: dict[UUID, UUID] = {}

    # ============ Writes ============

    async def add_company(self, company_id: UUID, owner_id: UUID) -> None:
        async with self._lock:
            self._owners[company_id] = owner_id

    async def remove_company(self, company_id: UUID) -> None:
        async with self._lock:
            self._owners.pop(company_id, None)
            for key in [k for k in self._members if k[1] == company_id]:
                del self._members[key]

    async def set_member(
        self,
        company_id: UUID,
        user_id: UUID,
        role: CompanyRole | str = CompanyRole.VIEWER,
    ) -> None:
        """Add a membership or change its role (one role per user and company)."""
        async with self._lock:
            self._members[(user_id, company_id)] = role

    async def remove_member(self, company_id: UUID, user_id: UUID) -> None:
        async with self._lock:
            self._members.pop((user_id, company_id), None)

    async def add_project(self, project_id: UUID, company_id: UUID) -> None:
        async with self._lock:
            self._projects[project_id] = company_id

    async def remove_project(self, project_id: UUID) -> None:
        async with self._lock:
            self._projects.pop(project_id, None)

    async def add_task(self, task_id: UUID, project_id: UUID) -> None:
        async with self._lock:
            self._tasks[task_id] = project_id

    # ============ TenancyStore ============

    async def read_tenancy_snapshot(
        self,
        user_id: UUID,
        company_id: UUID,
    ) -> TenancySnapshot:
        async with self._lock:
            owner_id = self._owners.get(company_id)
            if owner_id is None:
                return TenancySnapshot.missing()
            return TenancySnapshot(
                company_exists=True,
                owner_id=owner_id,
                membership_role=self._members.get((user_id, company_id)),
            )

    async def read_resource_chain(
        self,
        resource_type: ResourceType,
        resource_id: UUID,
    ) -> UUID | None:
        async with self._lock:
            if resource_type == ResourceType.COMPANY:
                return resource_id if resource_id in self._owners else None
            if resource_type == ResourceType.PROJECT:
                return self._projects.get(resource_id)
            if resource_type == ResourceType.TASK:
                project_id = self._tasks.get(resource_id)
                if project_id is None:
                    return None
                return self._projects.get(project_id)
            raise ValueError(f"Unsupported resource type: {resource_type}")
