"""
Pydantic Schemas

Input value objects and output shapes.

Schema Categories:
==================
- common: BaseSchema (camelCase aliases), AuthorSummary, health
- post: PostWithDetails, LikeResult, CommentWithAuthor
- user: UserProfile, UserSuggestion, FollowResult
- notification: NotificationWithDetails, UnreadCount
- auth: Identity, AuthResponse
- validation: *Input value objects with validate() / safe_validate()

Usage:
======
    from agora.shared.schemas.validation import CreatePostInput, validate
    from agora.shared.schemas.post import PostWithDetails
"""

from agora.shared.schemas.common import (
    BaseSchema,
    AuthorSummary,
    HealthResponse,
)
from agora.shared.schemas.post import (
    PostWithDetails,
    LikeResult,
    CommentWithAuthor,
    DeletedPost,
)
from agora.shared.schemas.user import (
    UserProfile,
    UserSuggestion,
    UserPublic,
    UserAuthRecord,
    FollowResult,
)
from agora.shared.schemas.notification import (
    PostPreview,
    NotificationWithDetails,
    UnreadCount,
    MarkedAsRead,
)
from agora.shared.schemas.auth import Identity, AuthResponse

__all__ = [
    # Common
    "BaseSchema",
    "AuthorSummary",
    "HealthResponse",
    # Posts
    "PostWithDetails",
    "LikeResult",
    "CommentWithAuthor",
    "DeletedPost",
    # Users
    "UserProfile",
    "UserSuggestion",
    "UserPublic",
    "UserAuthRecord",
    "FollowResult",
    # Notifications
    "PostPreview",
    "NotificationWithDetails",
    "UnreadCount",
    "MarkedAsRead",
    # Auth
    "Identity",
    "AuthResponse",
]
