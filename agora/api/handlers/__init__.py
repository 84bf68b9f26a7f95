"""
API Handlers

One router per resource; see routes.py for prefixes.
"""

from agora.api.handlers import (
    auth_handler,
    health_handler,
    notification_handler,
    post_handler,
    user_handler,
)

__all__ = [
    "auth_handler",
    "health_handler",
    "notification_handler",
    "post_handler",
    "user_handler",
]
