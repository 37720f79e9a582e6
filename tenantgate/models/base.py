"""
Base model classes and mixins.

- TimestampMixin: created_at, updated_at (always use)
- UUIDMixin: UUID primary key
"""

from datetime import datetime, timezone
from uuid import UUID as PyUUID, uuid4
from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    # Common type annotations - all datetimes are timezone-aware
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """
    Mixin for created_at and updated_at timestamps.

    Values are set in Python so they are available right after a flush
    without a refresh (async sessions can not lazy-load them).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )


class UUIDMixin:
    """Mixin for UUID primary key (uuid4)."""

    id: Mapped[PyUUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )


class StandardMixin(UUIDMixin, TimestampMixin):
    """UUID primary key + timestamps."""
    pass
