"""
Notification Repository

Database operations for the notification inbox.

Most notifications are written by the post and user repositories as part
of a like / comment / follow transaction. This repository reads the inbox,
flips read flags and offers direct create / delete for callers that
need them.

Usage:
======
    repo = SqlAlchemyNotificationRepository(db)

    page = await repo.get_by_user_id(user_id, cursor=None, limit=20, unread_only=True)
    unread = await repo.get_unread_count(user_id)
    await repo.mark_all_as_read(user_id)
"""

from typing import Optional

from sqlalchemy import Select, delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from agora.shared.core.exceptions import NotificationNotFoundError
from agora.shared.db.unit_of_work import atomic
from agora.shared.models import Notification, NotificationType
from agora.shared.repositories.base import BaseRepository
from agora.shared.repositories.interfaces import NotificationRepository
from agora.shared.schemas.notification import NotificationWithDetails
from agora.shared.utils.pagination import PaginatedResult, apply_cursor, paginate


class SqlAlchemyNotificationRepository(BaseRepository[Notification], NotificationRepository):
    """Repository for Notification rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Notification, session)

    @staticmethod
    def _details_query() -> Select:
        return select(Notification).options(
            joinedload(Notification.creator),
            joinedload(Notification.post),
        )

    async def create(
        self,
        user_id: str,
        creator_id: str,
        type: NotificationType,
        post_id: Optional[str] = None,
        comment_id: Optional[str] = None,
    ) -> NotificationWithDetails:
        """Insert a notification and return it with creator and post preview."""
        notification = Notification(
            type=type,
            user_id=user_id,
            creator_id=creator_id,
            post_id=post_id,
            comment_id=comment_id,
        )
        async with atomic(self.session, resource="Notification"):
            await self.add(notification)

        created = await self.find_by_id(notification.id)
        if created is None:
            raise NotificationNotFoundError(notification.id)
        return created

    async def get_by_user_id(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        unread_only: bool = False,
    ) -> PaginatedResult[NotificationWithDetails]:
        """
        Inbox page, newest first.

        Raises:
            ValidationError: Unknown cursor
        """
        cursor_row = await self.cursor_row(Notification, cursor)
        query = self._details_query().where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.read.is_(False))
        query = apply_cursor(query, Notification, cursor_row)

        result = await self.session.execute(query.limit(limit + 1))
        items = [NotificationWithDetails.model_validate(n) for n in result.scalars().all()]
        return paginate(items, limit)

    async def find_by_id(self, notification_id: str) -> Optional[NotificationWithDetails]:
        """One notification, or None."""
        result = await self.session.execute(
            self._details_query().where(Notification.id == notification_id)
        )
        notification = result.scalar_one_or_none()
        return NotificationWithDetails.model_validate(notification) if notification else None

    async def mark_as_read(self, notification_id: str) -> bool:
        """
        Flip one notification to read.

        SQL Generated:
            UPDATE notifications SET read = true WHERE id = '...'
        """
        async with atomic(self.session, resource="Notification"):
            result = await self.session.execute(
                update(Notification)
                .where(Notification.id == notification_id)
                .values(read=True)
                .execution_options(synchronize_session="fetch")
            )
        return (result.rowcount or 0) > 0

    async def mark_all_as_read(self, user_id: str) -> int:
        """Flip every unread notification of ``user_id``."""
        async with atomic(self.session, resource="Notification"):
            result = await self.session.execute(
                update(Notification)
                .where(Notification.user_id == user_id, Notification.read.is_(False))
                .values(read=True)
                .execution_options(synchronize_session="fetch")
            )
        return result.rowcount or 0

    async def get_unread_count(self, user_id: str) -> int:
        """Number of unread notifications."""
        return await self.count(Notification.user_id == user_id, Notification.read.is_(False))

    async def delete_by_post_id(self, post_id: str) -> int:
        """Remove every notification about a post."""
        async with atomic(self.session, resource="Notification"):
            result = await self.session.execute(
                delete(Notification).where(Notification.post_id == post_id)
            )
        return result.rowcount or 0

    async def delete_by_comment_id(self, comment_id: str) -> int:
        """Remove every notification about a comment."""
        async with atomic(self.session, resource="Notification"):
            result = await self.session.execute(
                delete(Notification).where(Notification.comment_id == comment_id)
            )
        return result.rowcount or 0

    async def exists(
        self,
        type: NotificationType,
        user_id: str,
        creator_id: str,
        post_id: Optional[str] = None,
    ) -> bool:
        """Whether a matching notification exists."""
        criteria = [
            Notification.type == type,
            Notification.user_id == user_id,
            Notification.creator_id == creator_id,
        ]
        if post_id is not None:
            criteria.append(Notification.post_id == post_id)
        result = await self.session.execute(select(exists().where(*criteria)))
        return bool(result.scalar())
