"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, camelCase aliases)
- AuthorSummary: The user fields embedded in posts, comments, notifications
- HealthResponse: Health check body

Serialization:
==============
Field names are snake_case in Python and camelCase on the wire:

    PostWithDetails(like_count=3, has_liked=True).model_dump(by_alias=True)
    # {"likeCount": 3, "hasLiked": true, ...}

Usage:
======
    from agora.shared.schemas.common import BaseSchema, AuthorSummary

    class CommentWithAuthor(BaseSchema):
        id: str
        content: str
        author: AuthorSummary
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All output schemas inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    - alias_generator: camelCase keys when dumped with by_alias=True
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class AuthorSummary(BaseSchema):
    """Public fields of a user shown next to their content."""

    id: str
    name: Optional[str] = None
    username: Optional[str] = None
    image: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "agora"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
