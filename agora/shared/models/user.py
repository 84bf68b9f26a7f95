"""
User Entity Model

Represents a registered application user.

Model Hierarchy:
================
    User
       ├── posts (Post[])          - Posts authored by this user
       ├── followers (Follow[])    - Rows where this user is followed
       └── following (Follow[])    - Rows where this user follows someone

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "jane@example.com"                                        │
│ username         │ "jane"                                                    │
│ name             │ "Jane Doe"                                                │
│ bio              │ "Coffee, cameras, climbing."                              │
│ password_hash    │ "$2b$12$..."  (NULL for OAuth-only users)                 │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.shared.models.base import Base, TimestampMixin, generate_id


# TYPE_CHECKING block prevents circular imports while enabling type hints
if TYPE_CHECKING:
    from agora.shared.models.post import Post
    from agora.shared.models.follow import Follow


class User(Base, TimestampMixin):
    """
    User model representing a registered application user.

    Users can:
    - Publish posts, like and comment on posts
    - Follow other users
    - Receive notifications about activity on their content

    Attributes:
        id: Unique identifier (UUID string)
        email: Email address (unique, indexed)
        username: Public handle (unique, NULL until backfilled)
        name: Display name
        bio, location, website, image: Optional profile fields
        password_hash: Bcrypt hash, NULL for users created through OAuth

    Relationships:
        posts: Posts authored by this user
        followers: Follow rows pointing at this user
        following: Follow rows created by this user
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    # Email address - used for sign in
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Public handle, assigned lazily for accounts created without one
    username: Mapped[Optional[str]] = mapped_column(
        String(30),
        unique=True,
        nullable=True,
        index=True,
    )

    # Bcrypt hashed password
    password_hash: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # One-to-Many: User has many posts
    posts: Mapped[list["Post"]] = relationship(
        "Post",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    followers: Mapped[list["Follow"]] = relationship(
        "Follow",
        foreign_keys="Follow.following_id",
        back_populates="following",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    following: Mapped[list["Follow"]] = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        back_populates="follower",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"
