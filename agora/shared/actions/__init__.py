"""
Actions: envelope-returning entry points over the use cases.
"""

from agora.shared.actions.auth_actions import AuthActions
from agora.shared.actions.base import ActionContext, BaseActions, action, profile_path
from agora.shared.actions.notification_actions import NotificationActions
from agora.shared.actions.post_actions import PostActions
from agora.shared.actions.user_actions import UserActions

__all__ = [
    "ActionContext",
    "BaseActions",
    "action",
    "profile_path",
    "PostActions",
    "UserActions",
    "NotificationActions",
    "AuthActions",
]
