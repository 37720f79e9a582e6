"""
Relation resolver.

Computes a user's standing with respect to a company from a single
tenancy snapshot. Owner beats membership: a company owner who also has a
membership row (a data anomaly) is still OWNER.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .interfaces import CompanyRole, Relation, parse_id

if TYPE_CHECKING:
    from tenantgate.core.interfaces.tenancy import TenancyStore


class RelationResolver:
    """Resolve (user, company) to OWNER, MEMBER(role), NONE or NOT_FOUND."""

    def __init__(self, store: TenancyStore):
        self.store = store

    async def resolve_relation(self, user_id: Any, company_id: Any) -> Relation:
        """
        Resolve the user's relation to the company.

        Performs exactly one store read. Nothing is cached: a role change
        is visible on the next call.

        Raises:
            InvalidInputError: If either id is malformed
            StoreUnavailableError: If the store could not answer
        """
        user_id = parse_id(user_id, "user_id")
        company_id = parse_id(company_id, "company_id")

        snapshot = await self.store.read_tenancy_snapshot(user_id, company_id)

        if not snapshot.company_exists:
            return Relation.not_found()
        if snapshot.owner_id is not None and snapshot.owner_id == user_id:
            return Relation.owner()
        if snapshot.membership_role is not None:
            return Relation.member(CompanyRole.from_membership(snapshot.membership_role))
        return Relation.none()
