"""
Composition Root

Wires repositories, use cases and actions together. This is the only
module that names concrete repository classes.

Object Graph (per request):
===========================
    AsyncSession
        │
        ├── SqlAlchemyPostRepository ─────────┐
        ├── SqlAlchemyUserRepository ─────────┼──→ UseCases ──→ Actions
        └── SqlAlchemyNotificationRepository ─┘        ▲
                                                       │
                        RateLimiter, CacheInvalidator ─┘   (process-wide)

Usage:
======
    async with AsyncSessionLocal() as session:
        actions = build_actions(session, rate_limiter, cache_invalidator)
        response = await actions.posts.get_feed(ActionContext())

    # Tests swap in fakes at the repository seam:
    use_cases = UseCases.from_repositories(fake_posts, fake_users, fake_notifications)
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from agora.shared.actions import AuthActions, NotificationActions, PostActions, UserActions
from agora.shared.adapters.cache_invalidator import CacheInvalidator
from agora.shared.repositories import (
    NotificationRepository,
    PostRepository,
    SqlAlchemyNotificationRepository,
    SqlAlchemyPostRepository,
    SqlAlchemyUserRepository,
    UserRepository,
)
from agora.shared.use_cases import (
    CreateCommentUseCase,
    CreatePostUseCase,
    DeletePostUseCase,
    EnsureUsernameUseCase,
    FollowUserUseCase,
    GetCommentsUseCase,
    GetFeedUseCase,
    GetNotificationsUseCase,
    GetPostUseCase,
    GetSuggestionsUseCase,
    GetUnreadCountUseCase,
    GetUserLikedPostsUseCase,
    GetUserPostsUseCase,
    GetUserProfileUseCase,
    MarkAllNotificationsAsReadUseCase,
    MarkNotificationAsReadUseCase,
    ResolveIdentityUseCase,
    SignInUseCase,
    SignUpUseCase,
    ToggleLikeUseCase,
    UpdateProfileUseCase,
)
from agora.shared.utils.rate_limiter import RateLimiter


@dataclass(frozen=True)
class Repositories:
    posts: PostRepository
    users: UserRepository
    notifications: NotificationRepository


@dataclass(frozen=True)
class UseCases:
    """Every use case, bound to one set of repositories."""

    # Posts
    create_post: CreatePostUseCase
    get_post: GetPostUseCase
    get_feed: GetFeedUseCase
    get_user_posts: GetUserPostsUseCase
    get_user_liked_posts: GetUserLikedPostsUseCase
    delete_post: DeletePostUseCase
    toggle_like: ToggleLikeUseCase
    create_comment: CreateCommentUseCase
    get_comments: GetCommentsUseCase
    # Users
    follow_user: FollowUserUseCase
    get_user_profile: GetUserProfileUseCase
    update_profile: UpdateProfileUseCase
    get_suggestions: GetSuggestionsUseCase
    ensure_username: EnsureUsernameUseCase
    # Notifications
    get_notifications: GetNotificationsUseCase
    mark_notification_as_read: MarkNotificationAsReadUseCase
    mark_all_notifications_as_read: MarkAllNotificationsAsReadUseCase
    get_unread_count: GetUnreadCountUseCase
    # Auth
    sign_up: SignUpUseCase
    sign_in: SignInUseCase
    resolve_identity: ResolveIdentityUseCase

    @classmethod
    def from_repositories(
        cls,
        posts: PostRepository,
        users: UserRepository,
        notifications: NotificationRepository,
    ) -> "UseCases":
        return cls(
            create_post=CreatePostUseCase(posts),
            get_post=GetPostUseCase(posts),
            get_feed=GetFeedUseCase(posts),
            get_user_posts=GetUserPostsUseCase(posts),
            get_user_liked_posts=GetUserLikedPostsUseCase(posts),
            delete_post=DeletePostUseCase(posts),
            toggle_like=ToggleLikeUseCase(posts),
            create_comment=CreateCommentUseCase(posts),
            get_comments=GetCommentsUseCase(posts),
            follow_user=FollowUserUseCase(users),
            get_user_profile=GetUserProfileUseCase(users),
            update_profile=UpdateProfileUseCase(users),
            get_suggestions=GetSuggestionsUseCase(users),
            ensure_username=EnsureUsernameUseCase(users),
            get_notifications=GetNotificationsUseCase(notifications),
            mark_notification_as_read=MarkNotificationAsReadUseCase(notifications),
            mark_all_notifications_as_read=MarkAllNotificationsAsReadUseCase(notifications),
            get_unread_count=GetUnreadCountUseCase(notifications),
            sign_up=SignUpUseCase(users),
            sign_in=SignInUseCase(users),
            resolve_identity=ResolveIdentityUseCase(users),
        )


@dataclass(frozen=True)
class Actions:
    posts: PostActions
    users: UserActions
    notifications: NotificationActions
    auth: AuthActions

    @classmethod
    def from_use_cases(
        cls,
        use_cases: UseCases,
        rate_limiter: RateLimiter,
        cache_invalidator: CacheInvalidator,
        rate_limit_enabled: Optional[bool] = None,
    ) -> "Actions":
        args = (use_cases, rate_limiter, cache_invalidator, rate_limit_enabled)
        return cls(
            posts=PostActions(*args),
            users=UserActions(*args),
            notifications=NotificationActions(*args),
            auth=AuthActions(*args),
        )


def build_repositories(session: AsyncSession) -> Repositories:
    """SQLAlchemy repositories sharing ``session``."""
    return Repositories(
        posts=SqlAlchemyPostRepository(session),
        users=SqlAlchemyUserRepository(session),
        notifications=SqlAlchemyNotificationRepository(session),
    )


def build_use_cases(session: AsyncSession) -> UseCases:
    repositories = build_repositories(session)
    return UseCases.from_repositories(
        repositories.posts,
        repositories.users,
        repositories.notifications,
    )


def build_actions(
    session: AsyncSession,
    rate_limiter: RateLimiter,
    cache_invalidator: CacheInvalidator,
    rate_limit_enabled: Optional[bool] = None,
) -> Actions:
    """
    Actions for one request.

    Args:
        session: The request's database session
        rate_limiter: Process-wide limiter
        cache_invalidator: Process-wide invalidator
        rate_limit_enabled: Overrides RATE_LIMIT_ENABLED when given
    """
    return Actions.from_use_cases(
        build_use_cases(session),
        rate_limiter,
        cache_invalidator,
        rate_limit_enabled,
    )
