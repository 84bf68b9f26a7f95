"""
Like Entity Model

Junction between a user and a post they currently like.

Invariant:
==========
At most one row per (user_id, post_id), enforced by a unique constraint.
The row exists exactly while the user likes the post; toggling removes it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id


if TYPE_CHECKING:
    from agora.shared.models.post import Post


class Like(Base, TimestampMixin):
    """
    Like model.

    Attributes:
        id: Unique identifier (UUID string)
        user_id: The user who likes the post
        post_id: The liked post
    """

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post: Mapped["Post"] = relationship(
        "Post",
        back_populates="likes",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Like(user_id={self.user_id}, post_id={self.post_id})>"
