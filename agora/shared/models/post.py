"""
Post Entity Model

A piece of text (and optionally an image) published by a user.

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7d1f0c2e-4b8a-4f7e-9a51-2f0d3c6b9e11                      │
│ author_id        │ 550e8400-e29b-41d4-a716-446655440000                      │
│ content          │ "First light over the harbour"                            │
│ image            │ "https://cdn.example.com/harbour.jpg"                     │
│ created_at       │ 2024-01-15T06:12:44.120331Z                               │
└──────────────────────────────────────────────────────────────────────────────┘

Ownership:
==========
Only the author may delete a post. The check lives in DeletePostUseCase;
the repository deletes whatever id it is given.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id


if TYPE_CHECKING:
    from agora.shared.models.user import User
    from agora.shared.models.comment import Comment
    from agora.shared.models.like import Like


class Post(Base, TimestampMixin):
    """
    Post model.

    Attributes:
        id: Unique identifier (UUID string)
        author_id: The user who wrote the post
        content: Post text (validation requires it, storage allows NULL)
        image: Optional image URL

    Relationships:
        author: The owning user
        comments: Comments on this post
        likes: Like rows for this post
    """

    __tablename__ = "posts"
    __table_args__ = (
        # Feed and profile pages walk posts newest first
        Index("ix_posts_author_created", "author_id", "created_at"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    author: Mapped["User"] = relationship(
        "User",
        back_populates="posts",
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    likes: Mapped[list["Like"]] = relationship(
        "Like",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Post(id={self.id}, author_id={self.author_id})>"
