"""
Follow Entity Model

Directed edge "follower follows following".

Invariant:
==========
At most one row per (follower_id, following_id). Self-follow is rejected
by FollowUserUseCase, not by the table.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id


if TYPE_CHECKING:
    from agora.shared.models.user import User


class Follow(Base, TimestampMixin):
    """
    Follow model.

    Attributes:
        follower_id: The user doing the following
        following_id: The user being followed
    """

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    follower_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    following_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    follower: Mapped["User"] = relationship(
        "User",
        foreign_keys=[follower_id],
        back_populates="following",
    )

    following: Mapped["User"] = relationship(
        "User",
        foreign_keys=[following_id],
        back_populates="followers",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Follow(follower_id={self.follower_id}, following_id={self.following_id})>"
