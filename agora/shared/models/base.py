"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Agora.
It includes the declarative base, the id generator and the timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from agora.shared.models.base import Base, TimestampMixin, generate_id

    class Post(Base, TimestampMixin):
        __tablename__ = "posts"
        id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
"""

from datetime import datetime, timezone
import uuid

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """
    New primary key value.

    Ids are stored as 36-character UUID strings so that the same schema
    works on PostgreSQL and on the SQLite database used by the tests.
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Timezone-aware current time with microsecond precision."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or together with TimestampMixin.

    Example:
        class User(Base, TimestampMixin):
            __tablename__ = "users"

            id: Mapped[str] = mapped_column(
                String(36),
                primary_key=True,
                default=generate_id,
            )
    """


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Example values:
        created_at: 2024-01-15T10:30:00.123456Z (when record was created)
        updated_at: 2024-01-16T14:45:30.654321Z (last modification time)

    Ordering:
    =========
    Feeds are ordered by (created_at DESC, id DESC). created_at is set on
    the Python side, not by a server default.
    """

    # Timestamp when the record was created
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )

    # Timestamp when the record was last updated
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
