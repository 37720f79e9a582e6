"""
Database dependencies.
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from tenantgate.models.database import async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session.

    One session per request: authorization reads and the mutation they
    gate commit (or roll back) together.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
