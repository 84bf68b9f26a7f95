"""
Notification Schemas

Output shapes for the notification inbox.
"""

from datetime import datetime
from typing import Optional

from agora.shared.models.enums import NotificationType
from agora.shared.schemas.common import AuthorSummary, BaseSchema


class PostPreview(BaseSchema):
    """The post a LIKE / COMMENT notification refers to."""

    id: str
    content: Optional[str] = None


class NotificationWithDetails(BaseSchema):
    """A notification with its creator and post preview."""

    id: str
    type: NotificationType
    read: bool
    created_at: datetime
    user_id: str
    creator: AuthorSummary
    post: Optional[PostPreview] = None
    comment_id: Optional[str] = None


class UnreadCount(BaseSchema):
    """Number of unread notifications."""

    count: int


class MarkedAsRead(BaseSchema):
    """How many notifications were flipped to read."""

    updated: int
