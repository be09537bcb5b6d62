"""
SQLAlchemy declarative base and common mixins.

Every table in the Visual RAG schema (documents, sessions, logs, prompts,
categories) inherits Base plus the UUID and timestamp mixins it needs.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; importing a model registers it on Base.metadata."""


class UUIDMixin:
    """
    UUID v4 primary key, generated client-side on insert.

    Attributes:
        id: Native PostgreSQL UUID primary key
    """

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    UTC creation and modification timestamps.

    Attributes:
        created_at: Set once on insert
        updated_at: Refreshed by the onupdate hook on every UPDATE
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
