"""
User Use Cases

Profiles, follows and handles.

Use Cases:
==========
    FollowUserUseCase        rejects self-follow before touching storage
    GetUserProfileUseCase    profile by handle plus is_following for the viewer
    UpdateProfileUseCase     partial update of name, bio, location, website, image
    GetSuggestionsUseCase    users the caller does not follow yet
    EnsureUsernameUseCase    assigns a handle to accounts created without one

Username Allocation:
====================
A handle is derived from the email local part with everything except
letters, digits and underscores removed:

    jane.doe+news@example.com → janedoe
    janedoe taken             → janedoe1, janedoe2, ...
    nothing left              → user<epoch millis>

Usage:
======
    use_case = FollowUserUseCase(user_repository)
    result = await use_case.execute(follower_id=me, following_id=them)
"""

import re
import time
from typing import Any, Mapping, Optional

from agora.shared.core.exceptions import NotFoundError, UserNotFoundError, ValidationError
from agora.shared.core.logging import use_case_logger
from agora.shared.repositories.interfaces import UserRepository
from agora.shared.schemas.user import FollowResult, UserProfile, UserPublic, UserSuggestion
from agora.shared.schemas.validation import FollowUserInput, UpdateProfileInput, validate


MAX_USERNAME_LENGTH = 30
DEFAULT_SUGGESTION_COUNT = 3
SUFFIX_DIGITS = 4

_NON_HANDLE_CHARS = re.compile(r"[^a-zA-Z0-9_]")


# ═══════════════════════════════════════════════════════════════════════════════
# USERNAME HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def base_username_from_email(email: str) -> str:
    """
    Handle candidate from the email local part.

    Example:
        base_username_from_email("jane.doe@example.com")  # "janedoe"
    """
    local_part = email.split("@", 1)[0]
    return _NON_HANDLE_CHARS.sub("", local_part)


async def allocate_username(user_repository: UserRepository, base: str) -> str:
    """
    First free handle among ``base``, ``base1``, ``base2``, ...

    Handles are capped at 30 characters; a suffixed handle keeps at most
    the first 26 characters of ``base``. An empty base falls back to
    ``user<epoch millis>``.
    """
    if not base:
        return f"user{int(time.time() * 1000)}"

    base = base[:MAX_USERNAME_LENGTH]
    taken = set(await user_repository.find_usernames_by_prefix(base))
    if base not in taken:
        return base

    # leave room for the numeric suffix
    if len(base) > MAX_USERNAME_LENGTH - SUFFIX_DIGITS:
        base = base[: MAX_USERNAME_LENGTH - SUFFIX_DIGITS]
        taken = set(await user_repository.find_usernames_by_prefix(base))

    suffix = 1
    while f"{base}{suffix}" in taken:
        suffix += 1
    return f"{base}{suffix}"


# ═══════════════════════════════════════════════════════════════════════════════
# FOLLOWS
# ═══════════════════════════════════════════════════════════════════════════════


class FollowUserUseCase:
    """
    Follow or unfollow a user.

    Rules:
        - both ids are required
        - a user cannot follow themselves; this is checked here, before any
          repository call
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, follower_id: str, following_id: str) -> FollowResult:
        """
        Args:
            follower_id: The signed-in user
            following_id: The user to follow or unfollow

        Returns:
            FollowResult(following, follower_count)

        Raises:
            ValidationError: Missing ids or self-follow
            UserNotFoundError: Following an unknown user
        """
        data = validate(
            FollowUserInput,
            {"follower_id": follower_id, "following_id": following_id},
        )
        if data.follower_id == data.following_id:
            raise ValidationError("Cannot follow yourself")

        result = await self.user_repository.toggle_follow(data.follower_id, data.following_id)
        use_case_logger.info(
            "Follow state changed",
            follower_id=data.follower_id,
            following_id=data.following_id,
            following=result.following,
        )
        return result


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILES
# ═══════════════════════════════════════════════════════════════════════════════


class GetUserProfileUseCase:
    """Public profile by handle."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, username: str, current_user_id: Optional[str] = None) -> UserProfile:
        """
        Returns:
            UserProfile; is_following is set only when a different user is
            viewing the profile

        Raises:
            NotFoundError: Unknown handle
        """
        username = (username or "").strip()
        profile = await self.user_repository.find_by_username(username) if username else None
        if profile is None:
            raise NotFoundError("User", username or None)

        if current_user_id and current_user_id != profile.id:
            is_following = await self.user_repository.is_following(current_user_id, profile.id)
            profile = profile.model_copy(update={"is_following": is_following})
        return profile


class UpdateProfileUseCase:
    """Partial profile update; only the keys present in ``data`` change."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str, data: Mapping[str, Any]) -> UserProfile:
        """
        Args:
            user_id: The signed-in user
            data: Raw fields, snake_case or camelCase

        Raises:
            ValidationError: Invalid field values
            UserNotFoundError: Unknown user
        """
        if not user_id:
            raise ValidationError.for_field("user_id", "User ID is required")
        changes = validate(UpdateProfileInput, dict(data)).changes()
        profile = await self.user_repository.update_profile(user_id, changes)
        use_case_logger.info("Profile updated", user_id=user_id, fields=sorted(changes))
        return profile


class GetSuggestionsUseCase:
    """Who to follow."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(
        self, user_id: str, limit: int = DEFAULT_SUGGESTION_COUNT
    ) -> list[UserSuggestion]:
        if not user_id:
            raise ValidationError.for_field("user_id", "User ID is required")
        if limit < 1:
            raise ValidationError.for_field("limit", "Limit must be positive")
        return await self.user_repository.get_suggestions(user_id, limit)


class EnsureUsernameUseCase:
    """
    Give a handle to an account that has none.

    Accounts keep their existing handle; the call is idempotent.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> UserPublic:
        """
        Raises:
            UserNotFoundError: Unknown user
        """
        profile = await self.user_repository.find_by_id(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)

        if profile.username:
            return UserPublic(
                id=profile.id,
                email=profile.email,
                username=profile.username,
                name=profile.name,
                image=profile.image,
            )

        username = await allocate_username(
            self.user_repository, base_username_from_email(profile.email)
        )
        user = await self.user_repository.set_username(user_id, username)
        use_case_logger.info("Username assigned", user_id=user_id, username=username)
        return user
