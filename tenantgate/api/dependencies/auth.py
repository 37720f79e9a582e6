"""
Caller identification.

Tokens are issued by an external identity service; this module only
verifies the bearer JWT and loads the user named by its ``sub`` claim.

Usage:
    from tenantgate.api.dependencies.auth import CurrentUser

    @router.get("/protected")
    async def handler(user: CurrentUser):
        ...
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from tenantgate.core.config import settings
from tenantgate.models.user import User
from .database import get_db


bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        HTTPException 401: If not authenticated
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.auth.secret_key,
            algorithms=[settings.auth.algorithm],
        )
    except JWTError:
        raise _unauthorized("Invalid token")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise _unauthorized("Invalid token")

    user = await db.get(User, user_id)
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("User is inactive")

    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


# Authenticated user (required)
CurrentUser = Annotated[User, Depends(get_current_user)]
