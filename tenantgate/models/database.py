"""
Database connection and session management.
"""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from tenantgate.core.config import DatabaseSettings, settings


def engine_options(database: DatabaseSettings) -> dict[str, Any]:
    """
    Keyword arguments for create_async_engine.

    Statement timeouts are enforced by asyncpg (command_timeout), which
    cancels the query on the server and leaves the connection usable.
    """
    return {
        "echo": database.echo,
        "pool_size": database.pool_size,
        "max_overflow": database.pool_overflow,
        "pool_timeout": database.pool_timeout,
        "connect_args": {"command_timeout": database.command_timeout},
    }


# Create async engine
engine = create_async_engine(str(settings.database.url), **engine_options(settings.database))

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> None:
    """Initialize database (create tables)."""
    from .base import Base
    from . import user, company, project, task  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
