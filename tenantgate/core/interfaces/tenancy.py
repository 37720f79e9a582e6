"""
Tenancy store protocol.
Implementations: SqlAlchemyTenancyStore, MemoryTenancyStore
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Any
from uuid import UUID

from tenantgate.core.auth.interfaces import ResourceType


@dataclass(frozen=True)
class TenancySnapshot:
    """
    Company existence, ownership and the caller's membership role,
    as observed by ONE read.
    """
    company_exists: bool
    owner_id: UUID | None = None
    membership_role: Any | None = None

    @classmethod
    def missing(cls) -> "TenancySnapshot":
        return cls(company_exists=False)


class TenancyStore(Protocol):
    """
    Protocol for the data store the authorization core reads from.

    Both reads are side-effect free. Implementations raise
    StoreUnavailableError when they cannot answer; they never retry
    on the caller's behalf.

    Example implementations:
    - SqlAlchemyTenancyStore: reads through the request's AsyncSession
    - MemoryTenancyStore: dict-backed (for testing/dev)
    """

    async def read_tenancy_snapshot(
        self,
        user_id: UUID,
        company_id: UUID,
    ) -> TenancySnapshot:
        """
        Read company existence, owner and the user's membership role together.

        Must be a single consistent read: ownership and membership can not
        be observed at different points in time.
        """
        ...

    async def read_resource_chain(
        self,
        resource_type: ResourceType,
        resource_id: UUID,
    ) -> UUID | None:
        """Return the owning company id, or None if any link is missing."""
        ...
