"""
Notification Entity Model

A side-effect record telling a user that someone liked their post,
commented on it, or followed them.

SAMPLE NOTIFICATION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 0b9c8e3a-1f3d-4c55-8d0b-7b1e2a9f4c60                      │
│ type             │ LIKE                                                      │
│ user_id          │ 550e8400-...  (recipient, the post author)                │
│ creator_id       │ 660e8400-...  (actor, the user who liked)                 │
│ post_id          │ 7d1f0c2e-...                                              │
│ comment_id       │ NULL          (set for COMMENT notifications only)        │
│ read             │ false                                                     │
└──────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
- Created in the same transaction as the Like / Comment / Follow row.
- Never created when creator_id == user_id.
- LIKE and FOLLOW notifications are deleted together with the Like /
  Follow row, matched by (type, post or recipient, creator).
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id
from agora.shared.models.enums import NotificationType


if TYPE_CHECKING:
    from agora.shared.models.user import User
    from agora.shared.models.post import Post
    from agora.shared.models.comment import Comment


class Notification(Base, TimestampMixin):
    """
    Notification model.

    Attributes:
        id: Unique identifier (UUID string)
        type: LIKE, COMMENT or FOLLOW
        user_id: Recipient
        creator_id: Actor who caused the notification
        post_id: Related post for LIKE / COMMENT
        comment_id: Related comment for COMMENT
        read: Whether the recipient has seen it
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
        Index("ix_notifications_user_read", "user_id", "read"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    type: Mapped[NotificationType] = mapped_column(
        SQLEnum(NotificationType, name="notification_type"),
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    creator_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    comment_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    read: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    creator: Mapped["User"] = relationship("User", foreign_keys=[creator_id])
    post: Mapped[Optional["Post"]] = relationship("Post")
    comment: Mapped[Optional["Comment"]] = relationship("Comment")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Notification(id={self.id}, type={self.type}, user_id={self.user_id})>"
