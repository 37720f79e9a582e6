"""
Authorization interfaces - Core abstractions.

These define the vocabulary shared by the policy, the relation resolver,
the resource locator and the engine that composes them. Nothing in here
touches the database; application code depends ONLY on these types.

Flow:
    ResourceRef --locate--> company_id --resolve--> Relation
    (Action, Relation) --policy--> PolicyDecision --engine--> Decision
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID

from .errors import InvalidInputError


# ============================================================
# ACTIONS, ROLES, RESOURCE TYPES
# ============================================================

class Action(str, Enum):
    """Actions a caller can attempt on a resource."""
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: "Action | str") -> "Action | None":
        """Return the matching Action, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class CompanyRole(str, Enum):
    """Roles held through a company membership."""
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"

    @classmethod
    def from_membership(cls, value: Any) -> "CompanyRole":
        """Any membership that is not EDITOR counts as VIEWER."""
        if value == cls.EDITOR or value == cls.EDITOR.value:
            return cls.EDITOR
        return cls.VIEWER


class ResourceType(str, Enum):
    """Resource kinds the locator knows how to anchor to a company."""
    COMPANY = "company"
    PROJECT = "project"
    TASK = "task"


def parse_id(value: Any, name: str = "id") -> UUID:
    """
    Validate an identifier before any lookup is attempted.

    Raises:
        InvalidInputError: If value is not a UUID (or a UUID string)
    """
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            pass
    raise InvalidInputError(f"Malformed {name}: {value!r}")


@dataclass(frozen=True)
class ResourceRef:
    """
    Reference to the resource an action targets.

    Usage:
        ResourceRef.project(project_id)
        ResourceRef.task(task_id)
        ResourceRef.company(company_id)  # listing / creation under a company
    """
    type: ResourceType
    id: Any

    @classmethod
    def company(cls, company_id: Any) -> "ResourceRef":
        return cls(ResourceType.COMPANY, company_id)

    @classmethod
    def project(cls, project_id: Any) -> "ResourceRef":
        return cls(ResourceType.PROJECT, project_id)

    @classmethod
    def task(cls, task_id: Any) -> "ResourceRef":
        return cls(ResourceType.TASK, task_id)

    @property
    def is_company_scoped(self) -> bool:
        return self.type == ResourceType.COMPANY


# ============================================================
# RELATION
# ============================================================

class RelationKind(str, Enum):
    """A user's standing with respect to a company."""
    OWNER = "owner"
    MEMBER = "member"
    NONE = "none"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Relation:
    """
    Result of resolving (user, company).

    role is set only for MEMBER relations.
    """
    kind: RelationKind
    role: CompanyRole | None = None

    @classmethod
    def owner(cls) -> "Relation":
        return cls(RelationKind.OWNER)

    @classmethod
    def member(cls, role: CompanyRole) -> "Relation":
        return cls(RelationKind.MEMBER, role)

    @classmethod
    def none(cls) -> "Relation":
        return cls(RelationKind.NONE)

    @classmethod
    def not_found(cls) -> "Relation":
        return cls(RelationKind.NOT_FOUND)

    @property
    def exists(self) -> bool:
        return self.kind != RelationKind.NOT_FOUND

    @property
    def label(self) -> str:
        """Policy-table column name: OWNER, EDITOR, VIEWER, NONE or NOT_FOUND."""
        if self.kind == RelationKind.MEMBER and self.role is not None:
            return self.role.value
        return self.kind.name

    def __str__(self) -> str:
        return self.label


# ============================================================
# POLICY DECISION
# ============================================================

@dataclass
class PolicyDecision:
    """
    Result of a policy evaluation.

    Attributes:
        allowed: Whether the action is permitted
        reason: Human-readable explanation (for errors/logging)
    """
    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls, reason: str | None = None) -> "PolicyDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str = "Permission denied") -> "PolicyDecision":
        return cls(allowed=False, reason=reason)


class PolicyEngine(ABC):
    """
    Abstract policy engine interface.

    Maps (action, relation) to a verdict. Implementations must be pure:
    no I/O, no state between calls.
    """

    @abstractmethod
    def evaluate(self, action: Action | str, relation: Relation) -> PolicyDecision:
        """
        Evaluate if a caller with this relation can perform action.

        Must be total: unknown actions and missing relations deny.
        """

    @abstractmethod
    def allowed_actions(self, relation: Relation) -> set[Action]:
        """All actions the relation is allowed to perform."""


# ============================================================
# ENGINE DECISION
# ============================================================

class DecisionOutcome(str, Enum):
    """Verdict of one authorize() call."""
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Decision:
    """
    Outcome of an authorization decision.

    company_id and relation are what the engine resolved while deciding,
    so callers act on them instead of looking them up again.
    """
    outcome: DecisionOutcome
    reason: str | None = None
    company_id: UUID | None = None
    relation: Relation | None = field(default=None)

    @classmethod
    def allowed_for(cls, company_id: UUID, relation: Relation) -> "Decision":
        return cls(DecisionOutcome.ALLOWED, None, company_id, relation)

    @classmethod
    def forbidden(
        cls,
        reason: str,
        company_id: UUID | None = None,
        relation: Relation | None = None,
    ) -> "Decision":
        return cls(DecisionOutcome.FORBIDDEN, reason, company_id, relation)

    @classmethod
    def not_found(cls, reason: str = "Resource not found") -> "Decision":
        return cls(DecisionOutcome.NOT_FOUND, reason)

    @classmethod
    def unavailable(cls, reason: str = "Tenancy store unavailable") -> "Decision":
        return cls(DecisionOutcome.UNAVAILABLE, reason)

    @property
    def allowed(self) -> bool:
        return self.outcome == DecisionOutcome.ALLOWED
