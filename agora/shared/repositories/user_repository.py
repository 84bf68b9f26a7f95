"""
User Repository

Database operations for accounts, profiles and follows.

Profile Row Shape:
==================
    SELECT users.*,
           (SELECT COUNT(*) FROM follows WHERE following_id = users.id) AS follower_count,
           (SELECT COUNT(*) FROM follows WHERE follower_id  = users.id) AS following_count,
           (SELECT COUNT(*) FROM posts   WHERE author_id    = users.id) AS post_count
    FROM users

Toggle Follow:
==============
    follow:   INSERT follow + INSERT FOLLOW notification for the followed user
    unfollow: DELETE follow + DELETE FOLLOW notifications from this follower
    then:     follower_count read after commit

Self-follow is not checked here; FollowUserUseCase rejects it.

Usage:
======
    repo = SqlAlchemyUserRepository(db)

    profile = await repo.find_by_username("jane")
    result = await repo.toggle_follow(follower_id=me, following_id=profile.id)
"""

from typing import Any, Optional

from sqlalchemy import Select, delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.shared.core.exceptions import UserNotFoundError
from agora.shared.core.logging import db_logger
from agora.shared.db.unit_of_work import atomic
from agora.shared.models import Follow, Notification, NotificationType, Post, User
from agora.shared.repositories.base import BaseRepository
from agora.shared.repositories.interfaces import UserRepository
from agora.shared.schemas.user import (
    FollowResult,
    UserAuthRecord,
    UserProfile,
    UserPublic,
    UserSuggestion,
)


# Columns a profile update may touch
PROFILE_FIELDS = frozenset({"name", "bio", "location", "website", "image"})


class SqlAlchemyUserRepository(BaseRepository[User], UserRepository):
    """
    Repository for User and Follow rows.

    Methods:
        find_by_id / find_by_username: Profiles with counts
        find_by_email: Auth projection with password hash
        create / update_profile / set_username: Writes
        get_suggestions: Users not yet followed
        toggle_follow: Follow / unfollow with notification side effect
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY BUILDING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _profile_query() -> Select:
        follower_count = (
            select(func.count(Follow.id))
            .where(Follow.following_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        following_count = (
            select(func.count(Follow.id))
            .where(Follow.follower_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        post_count = (
            select(func.count(Post.id))
            .where(Post.author_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        return select(
            User,
            follower_count.label("follower_count"),
            following_count.label("following_count"),
            post_count.label("post_count"),
        )

    @staticmethod
    def _to_profile(row: Any) -> UserProfile:
        user: User = row[0]
        return UserProfile(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            bio=user.bio,
            image=user.image,
            location=user.location,
            website=user.website,
            created_at=user.created_at,
            follower_count=row.follower_count or 0,
            following_count=row.following_count or 0,
            post_count=row.post_count or 0,
        )

    async def _find_profile(self, *criteria: Any) -> Optional[UserProfile]:
        result = await self.session.execute(self._profile_query().where(*criteria))
        row = result.first()
        return self._to_profile(row) if row else None

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Profile with counts, or None."""
        return await self._find_profile(User.id == user_id)

    async def find_by_username(self, username: str) -> Optional[UserProfile]:
        """Profile with counts by handle, or None."""
        return await self._find_profile(User.username == username)

    async def find_by_email(self, email: str) -> Optional[UserAuthRecord]:
        """
        Account with password hash, for sign-in.

        Args:
            email: Already normalized (trimmed, lower-case)
        """
        result = await self.session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        return UserAuthRecord.model_validate(user) if user else None

    async def exists_by_username(self, username: str) -> bool:
        """Whether the handle is taken."""
        return await self.count(User.username == username) > 0

    async def exists_by_email(self, email: str) -> bool:
        """Whether an account uses this email."""
        return await self.count(User.email == email) > 0

    async def find_usernames_by_prefix(self, prefix: str) -> list[str]:
        """
        Taken handles starting with ``prefix``.

        Used to pick a free numeric suffix in one query instead of probing
        jane1, jane2, ... one at a time.
        """
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        result = await self.session.execute(
            select(User.username).where(User.username.like(f"{escaped}%", escape="\\"))
        )
        return [username for username in result.scalars().all() if username]

    async def get_suggestions(self, current_user_id: str, limit: int) -> list[UserSuggestion]:
        """
        Users to follow: everyone except ``current_user_id`` and the users
        it already follows, newest accounts first.
        """
        already_following = select(Follow.following_id).where(
            Follow.follower_id == current_user_id
        )
        result = await self.session.execute(
            select(User)
            .where(User.id != current_user_id, User.id.not_in(already_following))
            .order_by(User.created_at.desc(), User.id.desc())
            .limit(limit)
        )
        return [UserSuggestion.model_validate(user) for user in result.scalars().all()]

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

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
        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            username=username,
            image=image,
        )
        async with atomic(self.session, "An account with these details already exists", resource="User"):
            await self.add(user)

        db_logger.info("User created", user_id=user.id)
        return UserPublic.model_validate(user)

    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        """
        Apply profile changes; unknown keys are ignored.

        Raises:
            UserNotFoundError: Unknown user
        """
        user = await self.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        async with atomic(self.session, resource="User"):
            for field, value in changes.items():
                if field in PROFILE_FIELDS:
                    setattr(user, field, value)

        profile = await self.find_by_id(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile

    async def set_username(self, user_id: str, username: str) -> UserPublic:
        """
        Assign a handle.

        Raises:
            UserNotFoundError: Unknown user
            ConflictError: Handle taken
        """
        user = await self.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        async with atomic(self.session, "Username already taken", resource="User"):
            user.username = username

        return UserPublic.model_validate(user)

    # ═══════════════════════════════════════════════════════════════════════════
    # FOLLOWS
    # ═══════════════════════════════════════════════════════════════════════════

    async def is_following(self, follower_id: str, following_id: str) -> bool:
        """Single-row existence check."""
        result = await self.session.execute(
            select(
                exists().where(
                    Follow.follower_id == follower_id,
                    Follow.following_id == following_id,
                )
            )
        )
        return bool(result.scalar())

    async def get_follower_count(self, user_id: str) -> int:
        """How many users follow ``user_id``."""
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.following_id == user_id)
        )
        return result.scalar() or 0

    async def get_following_count(self, user_id: str) -> int:
        """How many users ``user_id`` follows."""
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        )
        return result.scalar() or 0

    async def toggle_follow(self, follower_id: str, following_id: str) -> FollowResult:
        """
        Flip the follow state of (follower, following).

        Following writes the Follow and a FOLLOW notification for the followed
        user. Unfollowing removes the Follow and the FOLLOW notifications this
        follower created for that user. Either branch is a single transaction.

        Returns:
            FollowResult with the follower count read after commit

        Raises:
            UserNotFoundError: Following an unknown user
            ConflictError: A concurrent request created the same Follow first
        """
        result = await self.session.execute(
            select(Follow.id).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        follow_id = result.scalar_one_or_none()

        if follow_id is not None:
            async with atomic(self.session, resource="Follow"):
                await self.session.execute(delete(Follow).where(Follow.id == follow_id))
                await self.session.execute(
                    delete(Notification).where(
                        Notification.type == NotificationType.FOLLOW,
                        Notification.user_id == following_id,
                        Notification.creator_id == follower_id,
                    )
                )
            following = False
        else:
            if not await self.exists_by_id(following_id):
                raise UserNotFoundError(following_id)

            async with atomic(self.session, "Already following this user", resource="Follow"):
                self.session.add(Follow(follower_id=follower_id, following_id=following_id))
                if follower_id != following_id:
                    self.session.add(
                        Notification(
                            type=NotificationType.FOLLOW,
                            user_id=following_id,
                            creator_id=follower_id,
                        )
                    )
            following = True

        follower_count = await self.get_follower_count(following_id)
        db_logger.info(
            "Follow toggled",
            follower_id=follower_id,
            following_id=following_id,
            following=following,
        )
        return FollowResult(following=following, follower_count=follower_count)
