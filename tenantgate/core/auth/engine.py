"""
Authorization engine - Main facade for authorization.

Composes the resource locator, the relation resolver and the policy
engine into a single decision.

Usage:
    engine = AuthorizationEngine(store=store, policy_engine=TablePolicyEngine())
    decision = await engine.authorize(user.id, Action.UPDATE, ResourceRef.project(pid))
    if decision.allowed:
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog

from .errors import InvalidInputError, StoreUnavailableError
from .interfaces import (
    Action,
    Decision,
    PolicyEngine,
    Relation,
    RelationKind,
    ResourceRef,
    ResourceType,
    parse_id,
)
from .locator import ResourceLocator
from .relations import RelationResolver

if TYPE_CHECKING:
    from tenantgate.core.interfaces.tenancy import TenancyStore

logger = structlog.get_logger()


class AuthorizationEngine:
    """
    Default authorization engine implementation.

    Holds no state between calls: every decision reads the current
    tenancy state once and is a pure function of it. The engine never
    retries and never caches relations.
    """

    def __init__(self, store: TenancyStore, policy_engine: PolicyEngine):
        self.store = store
        self.policy_engine = policy_engine
        self.locator = ResourceLocator(store)
        self.resolver = RelationResolver(store)

    async def authorize(
        self,
        user_id: Any,
        action: Action | str,
        resource: ResourceRef,
    ) -> Decision:
        """
        Decide whether user may perform action on resource.

        Steps: locate company, resolve relation (one read), apply policy.
        Company-scoped references (listing/creating under a company) hide
        the company's existence from non-members: NONE becomes NOT_FOUND.

        Returns:
            Decision (does not raise for denials or store failures)

        Raises:
            InvalidInputError: If an id is malformed (before any lookup)
        """
        user_id = parse_id(user_id, "user_id")
        try:
            resource_type = ResourceType(resource.type)
        except ValueError:
            raise InvalidInputError(f"Unknown resource type: {resource.type!r}") from None
        resource = ResourceRef(resource_type, parse_id(resource.id, f"{resource_type.value}_id"))

        log = logger.bind(
            user_id=str(user_id),
            action=str(getattr(action, "value", action)),
            resource_type=resource.type.value,
            resource_id=str(resource.id),
        )

        try:
            company_id = await self.locator.locate_company(resource.type, resource.id)
            if company_id is None:
                decision = Decision.not_found(f"{resource.type.value.capitalize()} not found")
            else:
                relation = await self.resolver.resolve_relation(user_id, company_id)
                decision = self._decide(action, resource, company_id, relation)
        except StoreUnavailableError as exc:
            log.warning("authorization.unavailable", error=str(exc))
            return Decision.unavailable(str(exc) or "Tenancy store unavailable")

        log.debug(
            "authorization.decision",
            outcome=decision.outcome.value,
            relation=str(decision.relation) if decision.relation else None,
            reason=decision.reason,
        )
        return decision

    def _decide(
        self,
        action: Action | str,
        resource: ResourceRef,
        company_id: UUID,
        relation: Relation,
    ) -> Decision:
        if relation.kind == RelationKind.NOT_FOUND:
            if resource.is_company_scoped:
                return Decision.not_found("Company not found or you do not have access")
            # The chain pointed at a company that no longer exists
            return Decision.not_found(f"{resource.type.value.capitalize()} not found")

        if relation.kind == RelationKind.NONE and resource.is_company_scoped:
            return Decision.not_found("Company not found or you do not have access")

        verdict = self.policy_engine.evaluate(action, relation)
        if verdict.allowed:
            return Decision.allowed_for(company_id, relation)

        return Decision.forbidden(
            verdict.reason or "Permission denied",
            company_id=company_id,
            relation=relation,
        )

    async def authorize_listing(self, user_id: Any, company_id: Any) -> Decision:
        """
        Authorize enumerating resources under a company.

        Any relation other than NONE grants the whole listing; there is no
        per-row filtering.
        """
        return await self.authorize(user_id, Action.VIEW, ResourceRef.company(company_id))

    async def resolve_relation(self, user_id: Any, company_id: Any) -> Relation:
        """Resolve the caller's relation to a company (for listing/filtering)."""
        return await self.resolver.resolve_relation(user_id, company_id)

    async def locate_company(
        self,
        resource_type: ResourceType | str,
        resource_id: Any,
    ) -> UUID | None:
        """Resolve a resource to its company id, or None if not found."""
        return await self.locator.locate_company(resource_type, resource_id)

