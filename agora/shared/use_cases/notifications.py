"""
Notification Use Cases

The signed-in user's inbox.

Use Cases:
==========
    GetNotificationsUseCase             newest first, optionally unread only
    MarkNotificationAsReadUseCase       only the recipient may mark it
    MarkAllNotificationsAsReadUseCase   returns how many were flipped
    GetUnreadCountUseCase               badge count
"""

from typing import Optional

from agora.shared.core.exceptions import (
    ForbiddenError,
    NotificationNotFoundError,
    ValidationError,
)
from agora.shared.core.logging import use_case_logger
from agora.shared.repositories.interfaces import NotificationRepository
from agora.shared.schemas.notification import (
    MarkedAsRead,
    NotificationWithDetails,
    UnreadCount,
)
from agora.shared.schemas.validation import GetNotificationsInput, validate
from agora.shared.utils.pagination import PaginatedResult


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id:
        raise ValidationError.for_field("user_id", "User ID is required")
    return user_id


class GetNotificationsUseCase:
    """Inbox page; default page size 20."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def execute(
        self,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        unread_only: bool = False,
    ) -> PaginatedResult[NotificationWithDetails]:
        user_id = _require_user_id(user_id)
        data = validate(
            GetNotificationsInput,
            {"cursor": cursor, "limit": limit, "unread_only": unread_only},
        )
        return await self.notification_repository.get_by_user_id(
            user_id,
            cursor=data.cursor,
            limit=data.limit,
            unread_only=data.unread_only,
        )


class MarkNotificationAsReadUseCase:
    """
    Mark one notification as read.

    Raises:
        NotificationNotFoundError: Unknown id
        ForbiddenError: The notification belongs to another user
    """

    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def execute(self, notification_id: str, user_id: str) -> MarkedAsRead:
        user_id = _require_user_id(user_id)
        if not notification_id:
            raise ValidationError.for_field("notification_id", "Notification ID is required")

        notification = await self.notification_repository.find_by_id(notification_id)
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        if notification.user_id != user_id:
            raise ForbiddenError("You can only update your own notifications")

        updated = await self.notification_repository.mark_as_read(notification_id)
        return MarkedAsRead(updated=1 if updated else 0)


class MarkAllNotificationsAsReadUseCase:
    """Clear the unread badge."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def execute(self, user_id: str) -> MarkedAsRead:
        user_id = _require_user_id(user_id)
        updated = await self.notification_repository.mark_all_as_read(user_id)
        use_case_logger.info("Notifications marked as read", user_id=user_id, updated=updated)
        return MarkedAsRead(updated=updated)


class GetUnreadCountUseCase:
    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def execute(self, user_id: str) -> UnreadCount:
        user_id = _require_user_id(user_id)
        count = await self.notification_repository.get_unread_count(user_id)
        return UnreadCount(count=count)
