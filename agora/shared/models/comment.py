"""
Comment Entity Model

A reply attached to exactly one post and written by exactly one user.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id


if TYPE_CHECKING:
    from agora.shared.models.user import User
    from agora.shared.models.post import Post


class Comment(Base, TimestampMixin):
    """
    Comment model.

    Attributes:
        id: Unique identifier (UUID string)
        content: Comment text, 1..1000 characters
        post_id: The post being commented on
        author_id: The commenting user
    """

    __tablename__ = "comments"
    __table_args__ = (
        # Comment threads are read oldest first per post
        Index("ix_comments_post_created", "post_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author: Mapped["User"] = relationship("User")

    post: Mapped["Post"] = relationship(
        "Post",
        back_populates="comments",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Comment(id={self.id}, post_id={self.post_id})>"
