"""Tenancy store implementations."""

from tenantgate.implementations.tenancy.database import SqlAlchemyTenancyStore
from tenantgate.implementations.tenancy.memory import MemoryTenancyStore

__all__ = ["SqlAlchemyTenancyStore", "MemoryTenancyStore"]
