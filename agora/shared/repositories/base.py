"""
Base Repository

This module provides a generic base repository with the common operations
every SQLAlchemy repository in Agora needs.

What This Provides:
===================
- get(id)            → Fetch single record by id
- exists_by_id(id)   → Existence check without loading the row
- count(*criteria)   → COUNT(*) with optional WHERE criteria
- add(instance)      → Stage a new row and flush it
- cursor_row(...)    → Resolve a pagination cursor to its row

Generic Type Pattern:
=====================
    class SqlAlchemyPostRepository(BaseRepository[Post], PostRepository):
        def __init__(self, session: AsyncSession):
            super().__init__(Post, session)

    repo = SqlAlchemyPostRepository(db)
    post = await repo.get(post_id)  # Returns Post, not Any

flush() vs commit():
====================
- flush(): Sends SQL to the database inside the current transaction
- commit(): Done by atomic() around each logical write, so a repository
  method either fully lands or fully rolls back
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from agora.shared.core.exceptions import ValidationError
from agora.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Post, Notification)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: str) -> Optional[ModelType]:
        """
        Get a single record by its id.

        SQL Generated:
            SELECT * FROM posts WHERE id = '7d1f0c2e-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def exists_by_id(self, record_id: str) -> bool:
        """
        Check if a record exists without loading it.

        SQL Generated:
            SELECT COUNT(*) FROM posts WHERE id = '...'
        """
        return await self.count(self.model.id == record_id) > 0

    async def count(self, *criteria: Any) -> int:
        """
        Count records matching all ``criteria``.

        Example:
            unread = await repo.count(Notification.user_id == uid, Notification.read.is_(False))
        """
        query = select(sql_count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def cursor_row(self, model: Type[Base], cursor: Optional[str], *criteria: Any) -> Any:
        """
        Resolve a pagination cursor id to the row it names.

        Args:
            model: Mapped class the cursor id belongs to
            cursor: Id of the last item of the previous page, or None
            *criteria: Lookup used instead of ``model.id == cursor`` when the
                cursor id is not the primary key of ``model`` (liked posts
                are paged by their Like row, found by user and post id)

        Returns:
            The row, or None when no cursor was given

        Raises:
            ValidationError: The cursor does not name an existing row
        """
        if cursor is None:
            return None
        lookup = criteria or (model.id == cursor,)
        result = await self.session.execute(select(model).where(*lookup))
        row = result.scalars().first()
        if row is None:
            raise ValidationError.for_field("cursor", "Invalid cursor")
        return row

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def add(self, instance: ModelType) -> ModelType:
        """
        Stage a new row and flush it inside the current transaction.

        Callers wrap this in atomic() to commit.
        """
        self.session.add(instance)
        await self.session.flush()
        return instance
