"""
Table policy engine - DEFAULT implementation.

The role table below is the only place authorization rules live. Adding an
action or a role means adding a row or a column here, never an ad-hoc
check in a route.

Usage:
    # This is used automatically when no policy engine is configured
    # Or explicitly:
    AUTH_POLICY_ENGINE=table
"""

from typing import Any, Mapping

from ..interfaces import (
    Action,
    CompanyRole,
    PolicyDecision,
    PolicyEngine,
    Relation,
    RelationKind,
)
from ..registry import AuthRegistry


OWNER = Relation.owner()
EDITOR = Relation.member(CompanyRole.EDITOR)
VIEWER = Relation.member(CompanyRole.VIEWER)

# Relations allowed per action; anything not listed is denied
POLICY_TABLE: dict[Action, frozenset[Relation]] = {
    Action.VIEW: frozenset({OWNER, EDITOR, VIEWER}),
    Action.CREATE: frozenset({OWNER, EDITOR}),
    Action.UPDATE: frozenset({OWNER, EDITOR}),
    Action.DELETE: frozenset({OWNER}),
}

# Column order used when naming the relations an action requires
_RELATION_ORDER = (OWNER, EDITOR, VIEWER)


def _requirement(allowed: frozenset[Relation]) -> str:
    labels = [r.label for r in _RELATION_ORDER if r in allowed]
    if not labels:
        return "not permitted for any relation"
    if len(labels) == 1:
        return f"requires {labels[0]}"
    return f"requires {', '.join(labels[:-1])} or {labels[-1]}"


@AuthRegistry.policy_engine("table")
class TablePolicyEngine(PolicyEngine):
    """
    Role-table policy engine.

    Authorization rules:
    - OWNER can do everything
    - EDITOR members can view, create and update
    - VIEWER members can view
    - Non-members can do nothing
    - Unknown actions are denied

    Configuration:
        table: Override the action -> allowed relations mapping
    """

    def __init__(
        self,
        table: Mapping[Action, frozenset[Relation]] | None = None,
        **kwargs: Any,
    ):
        self.table = dict(table if table is not None else POLICY_TABLE)

    def evaluate(self, action: Action | str, relation: Relation) -> PolicyDecision:
        parsed = Action.parse(action)
        if parsed is None or parsed not in self.table:
            return PolicyDecision.deny(f"Unknown action: {action}")

        if relation.kind == RelationKind.MEMBER:
            relation = Relation.member(CompanyRole.from_membership(relation.role))

        allowed = self.table[parsed]
        if relation in allowed:
            return PolicyDecision.allow(f"{relation.label} may {parsed.value}")

        return PolicyDecision.deny(_requirement(allowed))

    def allowed_actions(self, relation: Relation) -> set[Action]:
        return {
            action
            for action in self.table
            if self.evaluate(action, relation).allowed
        }
