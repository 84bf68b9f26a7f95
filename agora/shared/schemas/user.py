"""
User Schemas

Output shapes for profiles, suggestions and follow toggles, plus the
internal authentication projection used by sign-in.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.shared.schemas.common import BaseSchema


class UserProfile(BaseSchema):
    """
    Public profile with follower / following / post counts.

    is_following is filled by GetUserProfileUseCase for a signed-in
    viewer and stays None for anonymous ones.
    """

    id: str
    email: str
    username: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime
    follower_count: int = 0
    following_count: int = 0
    post_count: int = 0
    is_following: Optional[bool] = None


class UserSuggestion(BaseSchema):
    """Minimal user info for "who to follow"."""

    id: str
    name: Optional[str] = None
    username: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None


class UserPublic(BaseSchema):
    """Account fields returned after sign-up / sign-in."""

    id: str
    email: str
    username: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None


class UserAuthRecord(UserPublic):
    """
    Account fields plus the password hash.

    Only the sign-in use case reads password_hash; it is excluded from
    every dump so it cannot end up in a response or a log line.
    """

    password_hash: Optional[str] = Field(default=None, exclude=True, repr=False)


class FollowResult(BaseSchema):
    """State after a follow toggle; follower_count is read after commit."""

    following: bool
    follower_count: int
