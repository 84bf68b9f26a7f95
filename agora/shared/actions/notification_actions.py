"""
Notification Actions

The caller's inbox. Every action requires a signed-in user.
"""

from typing import Optional

from agora.shared.actions.base import ActionContext, BaseActions, action
from agora.shared.schemas.notification import MarkedAsRead, NotificationWithDetails, UnreadCount
from agora.shared.utils.pagination import PaginatedResult


NOTIFICATIONS_PATH = "/notifications"


class NotificationActions(BaseActions):
    """Inbox actions."""

    @action
    async def get_notifications(
        self,
        ctx: ActionContext,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        unread_only: bool = False,
    ) -> PaginatedResult[NotificationWithDetails]:
        identity = ctx.require_identity()
        return await self.use_cases.get_notifications.execute(
            identity.id,
            cursor=cursor,
            limit=limit,
            unread_only=unread_only,
        )

    @action
    async def mark_as_read(self, ctx: ActionContext, notification_id: str) -> MarkedAsRead:
        identity = ctx.require_identity()
        result = await self.use_cases.mark_notification_as_read.execute(
            notification_id,
            identity.id,
        )
        await self.revalidate(NOTIFICATIONS_PATH)
        return result

    @action
    async def mark_all_as_read(self, ctx: ActionContext) -> MarkedAsRead:
        identity = ctx.require_identity()
        result = await self.use_cases.mark_all_notifications_as_read.execute(identity.id)
        await self.revalidate(NOTIFICATIONS_PATH)
        return result

    @action
    async def get_unread_count(self, ctx: ActionContext) -> UnreadCount:
        identity = ctx.require_identity()
        return await self.use_cases.get_unread_count.execute(identity.id)
