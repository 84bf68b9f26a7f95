"""
Use cases: one class per business operation.

Each takes its repositories in the constructor and exposes a single
``execute`` coroutine.
"""

from agora.shared.use_cases.auth import ResolveIdentityUseCase, SignInUseCase, SignUpUseCase
from agora.shared.use_cases.notifications import (
    GetNotificationsUseCase,
    GetUnreadCountUseCase,
    MarkAllNotificationsAsReadUseCase,
    MarkNotificationAsReadUseCase,
)
from agora.shared.use_cases.posts import (
    CreateCommentUseCase,
    CreatePostUseCase,
    DeletePostUseCase,
    GetCommentsUseCase,
    GetFeedUseCase,
    GetPostUseCase,
    GetUserLikedPostsUseCase,
    GetUserPostsUseCase,
    ToggleLikeUseCase,
)
from agora.shared.use_cases.users import (
    EnsureUsernameUseCase,
    FollowUserUseCase,
    GetSuggestionsUseCase,
    GetUserProfileUseCase,
    UpdateProfileUseCase,
    allocate_username,
    base_username_from_email,
)

__all__ = [
    # Posts
    "CreatePostUseCase",
    "GetPostUseCase",
    "GetFeedUseCase",
    "GetUserPostsUseCase",
    "GetUserLikedPostsUseCase",
    "DeletePostUseCase",
    "ToggleLikeUseCase",
    "CreateCommentUseCase",
    "GetCommentsUseCase",
    # Users
    "FollowUserUseCase",
    "GetUserProfileUseCase",
    "UpdateProfileUseCase",
    "GetSuggestionsUseCase",
    "EnsureUsernameUseCase",
    "allocate_username",
    "base_username_from_email",
    # Notifications
    "GetNotificationsUseCase",
    "MarkNotificationAsReadUseCase",
    "MarkAllNotificationsAsReadUseCase",
    "GetUnreadCountUseCase",
    # Auth
    "SignUpUseCase",
    "SignInUseCase",
    "ResolveIdentityUseCase",
]
