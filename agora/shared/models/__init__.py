"""
Agora SQLAlchemy Models

This package contains all database models for the Agora application.

Model Hierarchy:
================
    User
       ├── posts (Post[])
       │      ├── comments (Comment[])
       │      └── likes (Like[])
       ├── followers (Follow[])
       └── following (Follow[])

    Notification  ← recipient (User), creator (User), post?, comment?

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Registered application user
- Post: Text/image post owned by its author
- Comment: Reply to a post
- Like: Unique (user, post) pair
- Follow: Unique (follower, following) pair
- Notification: Side effect of like / comment / follow

Usage:
======
    from agora.shared.models import User, Post, Notification, NotificationType
"""

from agora.shared.models.base import Base, TimestampMixin, generate_id
from agora.shared.models.enums import NotificationType
from agora.shared.models.user import User
from agora.shared.models.post import Post
from agora.shared.models.comment import Comment
from agora.shared.models.like import Like
from agora.shared.models.follow import Follow
from agora.shared.models.notification import Notification

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "generate_id",
    # Enums
    "NotificationType",
    # Models
    "User",
    "Post",
    "Comment",
    "Like",
    "Follow",
    "Notification",
]
