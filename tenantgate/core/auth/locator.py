"""
Resource locator.

Permissions are always evaluated at the company, so every resource
reference is first anchored to its owning company id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from .errors import InvalidInputError
from .interfaces import ResourceType, parse_id

if TYPE_CHECKING:
    from tenantgate.core.interfaces.tenancy import TenancyStore


class ResourceLocator:
    """Resolve a (resource_type, resource_id) pair to its company id."""

    def __init__(self, store: TenancyStore):
        self.store = store

    async def locate_company(
        self,
        resource_type: ResourceType | str,
        resource_id: Any,
    ) -> UUID | None:
        """
        Get the owning company id of a resource.

        Project: its company_id. Task: task -> project -> company.
        Company: the id itself; existence is settled by the relation
        snapshot, so no read happens here.

        Returns:
            Company id, or None if any link of the chain is missing

        Raises:
            InvalidInputError: If the type is unknown or the id malformed
            StoreUnavailableError: If the store could not answer
        """
        try:
            resource_type = ResourceType(resource_type)
        except ValueError:
            raise InvalidInputError(f"Unknown resource type: {resource_type!r}") from None

        resource_id = parse_id(resource_id, f"{resource_type.value}_id")

        if resource_type == ResourceType.COMPANY:
            return resource_id

        return await self.store.read_resource_chain(resource_type, resource_id)
