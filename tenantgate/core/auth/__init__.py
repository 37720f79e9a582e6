"""
Authorization module - Company tenancy authorization.

Every permission check is anchored at the company (the tenancy root):

    ResourceRef --ResourceLocator--> company_id
    (user, company_id) --RelationResolver--> Relation (one snapshot read)
    (action, Relation) --PolicyEngine--> allow / deny
    AuthorizationEngine --> Decision

Usage:
=============

    from tenantgate.core.auth import Action, AuthorizationEngine, ResourceRef

    engine = AuthorizationEngine(store=store, policy_engine=TablePolicyEngine())
    decision = await engine.authorize(user_id, Action.DELETE, ResourceRef.project(pid))

    match decision.outcome:
        case DecisionOutcome.ALLOWED: ...
        case DecisionOutcome.FORBIDDEN: ...     # decision.reason names the missing relation
        case DecisionOutcome.NOT_FOUND: ...
        case DecisionOutcome.UNAVAILABLE: ...   # store failure, never a denial

Configuration:
==============

- AUTH_POLICY_ENGINE: "table" (default)
- AUTH_STORE_READ_TIMEOUT: seconds per tenancy read (default 5.0)

Extensibility:
=============

    @AuthRegistry.policy_engine("custom")
    class CustomPolicyEngine(PolicyEngine):
        ...
"""

# Core types
from .interfaces import (
    Action,
    CompanyRole,
    ResourceType,
    ResourceRef,
    RelationKind,
    Relation,
    PolicyDecision,
    PolicyEngine,
    DecisionOutcome,
    Decision,
    parse_id,
)
from .errors import AuthorizationError, InvalidInputError, StoreUnavailableError

# Registry (for extending with custom implementations)
from .registry import AuthRegistry

# Components
from .relations import RelationResolver
from .locator import ResourceLocator
from .engine import AuthorizationEngine

# Default implementations (auto-registered)
from .policy import TablePolicyEngine, POLICY_TABLE

__all__ = [
    # Types
    "Action",
    "CompanyRole",
    "ResourceType",
    "ResourceRef",
    "RelationKind",
    "Relation",
    "PolicyDecision",
    "PolicyEngine",
    "DecisionOutcome",
    "Decision",
    "parse_id",
    # Errors
    "AuthorizationError",
    "InvalidInputError",
    "StoreUnavailableError",
    # Registry
    "AuthRegistry",
    # Components
    "RelationResolver",
    "ResourceLocator",
    "AuthorizationEngine",
    # Default implementations
    "TablePolicyEngine",
    "POLICY_TABLE",
]
