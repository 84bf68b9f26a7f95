"""
Repository Interfaces

Abstract data-access contracts the use-case layer depends on.

Each interface has one production implementation backed by SQLAlchemy and
an in-memory fake in the test-suite. Use cases never import a concrete
repository; the composition root decides which one they get.

    PostRepository          ← SqlAlchemyPostRepository
    UserRepository          ← SqlAlchemyUserRepository
    NotificationRepository  ← SqlAlchemyNotificationRepository

Multi-row writes:
=================
toggle_like, create_comment, toggle_follow and delete write a primary row
and its notifications. Implementations must apply both or neither, and
must read returned counts after the write is committed.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from agora.shared.models.enums import NotificationType
from agora.shared.schemas.notification import NotificationWithDetails
from agora.shared.schemas.post import CommentWithAuthor, LikeResult, PostWithDetails
from agora.shared.schemas.user import (
    FollowResult,
    UserAuthRecord,
    UserProfile,
    UserPublic,
    UserSuggestion,
)
from agora.shared.utils.pagination import PaginatedResult


class PostRepository(ABC):
    """Posts, likes and comments."""

    @abstractmethod
    async def create(
        self,
        author_id: str,
        content: str,
        image: Optional[str] = None,
    ) -> PostWithDetails:
        """Insert a post and return it with zero counts."""

    @abstractmethod
    async def find_by_id(
        self,
        post_id: str,
        current_user_id: Optional[str] = None,
    ) -> Optional[PostWithDetails]:
        """One post with counts and has_liked for ``current_user_id``."""

    @abstractmethod
    async def get_feed(
        self,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """All posts, newest first."""

    @abstractmethod
    async def get_user_posts(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """Posts written by ``user_id``, newest first."""

    @abstractmethod
    async def get_user_liked_posts(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """Posts liked by ``user_id``, most recently liked first."""

    @abstractmethod
    async def delete(self, post_id: str) -> bool:
        """Delete a post and its notifications together. False if absent."""

    @abstractmethod
    async def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        """
        Like if not liked, unlike if liked.

        Raises:
            NotFoundError: Liking a post that does not exist
        """

    @abstractmethod
    async def has_user_liked(self, post_id: str, user_id: str) -> bool:
        """Whether the Like row for (user, post) exists."""

    @abstractmethod
    async def get_comments(
        self,
        post_id: str,
        cursor: Optional[str],
        limit: int,
    ) -> PaginatedResult[CommentWithAuthor]:
        """Comments on a post, oldest first."""

    @abstractmethod
    async def create_comment(
        self,
        post_id: str,
        content: str,
        author_id: str,
    ) -> CommentWithAuthor:
        """
        Insert a comment and notify the post author.

        Raises:
            NotFoundError: The post does not exist
        """

    @abstractmethod
    async def exists(self, post_id: str) -> bool:
        """Whether the post exists."""

    @abstractmethod
    async def get_author_id(self, post_id: str) -> Optional[str]:
        """Author of the post, or None if it does not exist."""


class UserRepository(ABC):
    """Accounts, profiles and follows."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Profile with counts."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[UserProfile]:
        """Profile with counts, looked up by handle."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserAuthRecord]:
        """Account including the password hash, for sign-in."""

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Whether the handle is taken."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Whether an account uses this email."""

    @abstractmethod
    async def find_usernames_by_prefix(self, prefix: str) -> list[str]:
        """Taken handles starting with ``prefix``."""

    @abstractmethod
    async def create(
        self,
        email: str,
        name: Optional[str],
        password_hash: Optional[str],
        username: Optional[str] = None,
        image: Optional[str] = None,
    ) -> UserPublic:
        """
        Insert an account.

        Raises:
            ConflictError: Email or username already taken
        """

    @abstractmethod
    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        """
        Apply profile field changes.

        Raises:
            NotFoundError: The user does not exist
        """

    @abstractmethod
    async def set_username(self, user_id: str, username: str) -> UserPublic:
        """
        Assign a handle.

        Raises:
            NotFoundError: The user does not exist
            ConflictError: The handle is taken
        """

    @abstractmethod
    async def get_suggestions(self, current_user_id: str, limit: int) -> list[UserSuggestion]:
        """Users other than ``current_user_id`` that it does not follow yet."""

    @abstractmethod
    async def toggle_follow(self, follower_id: str, following_id: str) -> FollowResult:
        """
        Follow if not following, unfollow if following.

        Raises:
            NotFoundError: Following a user that does not exist
        """

    @abstractmethod
    async def is_following(self, follower_id: str, following_id: str) -> bool:
        """Whether the Follow row exists."""

    @abstractmethod
    async def get_follower_count(self, user_id: str) -> int:
        """How many users follow ``user_id``."""

    @abstractmethod
    async def get_following_count(self, user_id: str) -> int:
        """How many users ``user_id`` follows."""


class NotificationRepository(ABC):
    """The notification inbox."""

    @abstractmethod
    async def create(
        self,
        user_id: str,
        creator_id: str,
        type: NotificationType,
        post_id: Optional[str] = None,
        comment_id: Optional[str] = None,
    ) -> NotificationWithDetails:
        """Insert a notification."""

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        unread_only: bool = False,
    ) -> PaginatedResult[NotificationWithDetails]:
        """Inbox for ``user_id``, newest first."""

    @abstractmethod
    async def find_by_id(self, notification_id: str) -> Optional[NotificationWithDetails]:
        """One notification."""

    @abstractmethod
    async def mark_as_read(self, notification_id: str) -> bool:
        """Flip one notification to read. False if absent."""

    @abstractmethod
    async def mark_all_as_read(self, user_id: str) -> int:
        """Flip every unread notification of ``user_id``; returns how many."""

    @abstractmethod
    async def get_unread_count(self, user_id: str) -> int:
        """Number of unread notifications."""

    @abstractmethod
    async def delete_by_post_id(self, post_id: str) -> int:
        """Remove notifications about a post; returns how many."""

    @abstractmethod
    async def delete_by_comment_id(self, comment_id: str) -> int:
        """Remove notifications about a comment; returns how many."""

    @abstractmethod
    async def exists(
        self,
        type: NotificationType,
        user_id: str,
        creator_id: str,
        post_id: Optional[str] = None,
    ) -> bool:
        """Whether a matching notification exists."""
