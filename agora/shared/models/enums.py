"""
Enums used across the application.
"""

from enum import Enum


class NotificationType(str, Enum):
    """What a notification is about."""

    LIKE = "LIKE"
    COMMENT = "COMMENT"
    FOLLOW = "FOLLOW"
