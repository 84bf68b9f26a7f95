"""
Repository Pattern Implementations

Repositories encapsulate database queries behind abstract interfaces so the
use-case layer can run against SQLAlchemy in production and against
in-memory fakes in tests.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]                 ← Generic helpers (get, count, cursor)
         │
         ├── SqlAlchemyPostRepository         ← implements PostRepository
         ├── SqlAlchemyUserRepository         ← implements UserRepository
         └── SqlAlchemyNotificationRepository ← implements NotificationRepository

Usage Example:
==============
    from agora.shared.repositories import SqlAlchemyPostRepository

    async def like(db: AsyncSession, post_id: str, user_id: str):
        repo = SqlAlchemyPostRepository(db)
        return await repo.toggle_like(post_id, user_id)
"""

from agora.shared.repositories.base import BaseRepository
from agora.shared.repositories.interfaces import (
    PostRepository,
    UserRepository,
    NotificationRepository,
)
from agora.shared.repositories.post_repository import SqlAlchemyPostRepository
from agora.shared.repositories.user_repository import SqlAlchemyUserRepository
from agora.shared.repositories.notification_repository import SqlAlchemyNotificationRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Interfaces
    "PostRepository",
    "UserRepository",
    "NotificationRepository",
    # Implementations
    "SqlAlchemyPostRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyNotificationRepository",
]
