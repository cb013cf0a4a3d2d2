"""Base model mixins and utilities.

This module provides reusable mixins for common model patterns:
- UUIDMixin: UUID primary key
- TimestampMixin: created_at and updated_at fields
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from trendcast.core.database import Base


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


class UUIDMixin:
    """Mixin for UUID primary key.

    Provides a UUID primary key field that is automatically generated.
    The id can also be assigned before insert so callers can reference
    a record whose write has not been confirmed yet.
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[uuid.UUID]:
        """UUID primary key.

        Returns:
            UUID column mapped to primary key
        """
        return mapped_column(
            primary_key=True,
            default=uuid.uuid4,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """Timestamp when record was created.

        Returns:
            DateTime column with default as current UTC time
        """
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
            server_default=func.now(),
        )

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        """Timestamp when record was last updated.

        Returns:
            DateTime column that updates automatically
        """
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
        )


__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "utc_now",
]
