"""
Authorization dependencies.

The engine returns a Decision; this module is where a Decision becomes an
HTTP response. Policy per reference type:

- Company-scoped (listing, creating under a company): non-members get 404
- Single project/task: missing -> 404, exists but denied -> 403
- Store failure -> 503, never 403

Usage:
    @router.patch("/{project_id}")
    async def update_project(
        project_id: UUID,
        decision: Decision = Depends(require_permission(Action.UPDATE, ResourceType.PROJECT, "project_id")),
    ):
        ...
"""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from tenantgate.core.auth import (
    Action,
    AuthRegistry,
    AuthorizationEngine,
    Decision,
    DecisionOutcome,
    InvalidInputError,
    PolicyEngine,
    ResourceRef,
    ResourceType,
)
from tenantgate.core.config import settings
from tenantgate.implementations.tenancy import SqlAlchemyTenancyStore
from .auth import CurrentUser
from .database import get_db


@lru_cache
def get_policy_engine() -> PolicyEngine:
    """
    Get configured policy engine.

    Reads from AUTH_POLICY_ENGINE environment variable.
    Default: "table"
    """
    return AuthRegistry.get_policy_engine(settings.auth.policy_engine)


async def get_authorization_engine(
    db: AsyncSession = Depends(get_db),
) -> AuthorizationEngine:
    """Authorization engine reading through the request's session."""
    store = SqlAlchemyTenancyStore(db)
    return AuthorizationEngine(store=store, policy_engine=get_policy_engine())


Authorizer = Annotated[AuthorizationEngine, Depends(get_authorization_engine)]


_STATUS_FOR_OUTCOME = {
    DecisionOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DecisionOutcome.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    DecisionOutcome.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_decision(decision: Decision) -> Decision:
    """
    Return the decision if allowed, otherwise raise the matching HTTPException.

    Raises:
        HTTPException: 404, 403 or 503
    """
    if decision.allowed:
        return decision

    status_code = _STATUS_FOR_OUTCOME.get(decision.outcome, status.HTTP_403_FORBIDDEN)
    detail = decision.reason or "Permission denied"
    if decision.outcome == DecisionOutcome.FORBIDDEN:
        detail = f"Not authorized: {detail}"

    raise HTTPException(status_code=status_code, detail=detail)


def require_permission(
    action: Action,
    resource_type: ResourceType,
    id_param: str,
) -> Callable:
    """
    Dependency factory for checking permission on the resource in the path.

    Usage:
    ```python
    @router.delete("/{project_id}")
    async def delete_project(
        decision: Decision = Depends(require_permission(Action.DELETE, ResourceType.PROJECT, "project_id")),
    ):
        ...
    ```
    """

    async def check_permission(
        request: Request,
        current_user: CurrentUser,
        engine: Authorizer,
    ) -> Decision:
        resource_id = request.path_params.get(id_param)

        try:
            decision = await engine.authorize(
                current_user.id,
                action,
                ResourceRef(resource_type, resource_id),
            )
        except InvalidInputError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

        return raise_for_decision(decision)

    return check_permission


def require_listing(company_id_param: str = "company_id") -> Callable:
    """Dependency factory for company-scoped listings (membership gates the list)."""

    async def check_listing(
        request: Request,
        current_user: CurrentUser,
        engine: Authorizer,
    ) -> Decision:
        company_id = request.path_params.get(company_id_param)

        try:
            decision = await engine.authorize_listing(current_user.id, company_id)
        except InvalidInputError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

        return raise_for_decision(decision)

    return check_listing


def permissions_for(decision: Decision) -> list[Action]:
    """Actions the caller may perform, in table order."""
    allowed = get_policy_engine().allowed_actions(decision.relation) if decision.relation else set()
    return [action for action in Action if action in allowed]
