"""
Input Validation

Typed value objects for every write and paged read, plus two helpers:

    validate(Model, raw)       → Model instance, or raises ValidationError
    safe_validate(Model, raw)  → ValidationResult(success, data, error)

Rules:
======
    CreatePostInput      content trimmed, 1..5000; image optional http(s) URL, "" → None
    CreateCommentInput   post_id required; content trimmed, 1..1000
    ToggleLikeInput      post_id, user_id required
    DeletePostInput      post_id required
    PostIdInput          post_id required (reads: get post, list comments)
    FollowUserInput      follower_id, following_id required
    GetFeedInput         cursor optional; limit 1..50, default 10
    PaginationInput      cursor optional; limit 1..50, default 10
    UpdateProfileInput   name 1..100; bio ≤ 500; location ≤ 100; website / image URLs;
                         "" clears bio, location, website, image
    SignUpInput          email trimmed + lower-cased; password 8..100 with lower,
                         upper and digit; name 1..100; username 3..30 [A-Za-z0-9_-]
    SignInInput          email; password required
    GetNotificationsInput cursor; limit 1..50, default 20; unread_only

Field names are accepted in snake_case or camelCase (postId, unreadOnly).

Usage:
======
    from agora.shared.schemas.validation import CreatePostInput, validate

    data = validate(CreatePostInput, {"content": "  hi  "})
    data.content  # "hi"
"""

import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from agora.shared.core.exceptions import ValidationError
from agora.shared.core.responses import validation_error_from_pydantic
from agora.shared.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


ModelT = TypeVar("ModelT", bound=BaseModel)

MAX_POST_LENGTH = 5000
MAX_COMMENT_LENGTH = 1000
DEFAULT_NOTIFICATION_PAGE_SIZE = 20

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

_http_url = TypeAdapter(HttpUrl)


# ═══════════════════════════════════════════════════════════════════════════════
# SHARED CHECKS
# ═══════════════════════════════════════════════════════════════════════════════


def _optional_url(value: Any, message: str) -> Optional[str]:
    """None / "" → None; otherwise the original string if it is an http(s) URL."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(message)
    value = value.strip()
    if not value:
        return None
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError(message)
    return value


def _required_id(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


def _bounded_text(value: str, *, empty: str, too_long: str, max_length: int) -> str:
    value = value.strip()
    if not value:
        raise ValueError(empty)
    if len(value) > max_length:
        raise ValueError(too_long)
    return value


def _limit(value: Any) -> Any:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError("Limit must be an integer")
    return value


class InputSchema(BaseModel):
    """Base for input value objects; accepts snake_case and camelCase keys."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
        frozen=True,
    )


class _PagedInput(InputSchema):
    cursor: Optional[str] = None
    limit: int = Field(default=DEFAULT_PAGE_SIZE)

    @field_validator("cursor", mode="before")
    @classmethod
    def _blank_cursor(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("limit", mode="before")
    @classmethod
    def _no_bool_limit(cls, value: Any) -> Any:
        if value is None:
            return cls.model_fields["limit"].default
        return _limit(value)

    @field_validator("limit")
    @classmethod
    def _limit_range(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Limit must be positive")
        if value > MAX_PAGE_SIZE:
            raise ValueError(f"Limit cannot exceed {MAX_PAGE_SIZE}")
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# POSTS
# ═══════════════════════════════════════════════════════════════════════════════


class CreatePostInput(InputSchema):
    """New post body."""

    content: str
    image: Optional[str] = None

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return _bounded_text(
            value,
            empty="Post cannot be empty",
            too_long=f"Post is too long (maximum {MAX_POST_LENGTH} characters)",
            max_length=MAX_POST_LENGTH,
        )

    @field_validator("image", mode="before")
    @classmethod
    def _image(cls, value: Any) -> Optional[str]:
        return _optional_url(value, "Invalid image URL")


class CreateCommentInput(InputSchema):
    """New comment body."""

    post_id: str
    content: str

    @field_validator("post_id", mode="before")
    @classmethod
    def _post_id(cls, value: Any) -> str:
        return _required_id(value, "Post ID is required")

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return _bounded_text(
            value,
            empty="Comment cannot be empty",
            too_long=f"Comment is too long (maximum {MAX_COMMENT_LENGTH} characters)",
            max_length=MAX_COMMENT_LENGTH,
        )


class ToggleLikeInput(InputSchema):
    """Who likes which post."""

    post_id: str
    user_id: str

    @field_validator("post_id", mode="before")
    @classmethod
    def _post_id(cls, value: Any) -> str:
        return _required_id(value, "Post ID is required")

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, value: Any) -> str:
        return _required_id(value, "User ID is required")


class DeletePostInput(InputSchema):
    """Which post to delete."""

    post_id: str

    @field_validator("post_id", mode="before")
    @classmethod
    def _post_id(cls, value: Any) -> str:
        return _required_id(value, "Post ID is required")


class PostIdInput(InputSchema):
    """A post id for reads."""

    post_id: str

    @field_validator("post_id", mode="before")
    @classmethod
    def _post_id(cls, value: Any) -> str:
        return _required_id(value, "Post ID is required")


class GetFeedInput(_PagedInput):
    """Feed page request."""

    current_user_id: Optional[str] = None


class PaginationInput(_PagedInput):
    """Generic page request (profile timelines, comment threads)."""


# ═══════════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════════


class FollowUserInput(InputSchema):
    """Follow edge to toggle."""

    follower_id: str
    following_id: str

    @field_validator("follower_id", mode="before")
    @classmethod
    def _follower_id(cls, value: Any) -> str:
        return _required_id(value, "Follower ID is required")

    @field_validator("following_id", mode="before")
    @classmethod
    def _following_id(cls, value: Any) -> str:
        return _required_id(value, "User ID is required")


class UpdateProfileInput(InputSchema):
    """
    Partial profile update.

    Only keys present in the raw input are applied (see model_fields_set).
    An empty string clears bio, location, website or image.
    """

    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _bounded_text(
            value,
            empty="Name cannot be empty",
            too_long="Name is too long (maximum 100 characters)",
            max_length=100,
        )

    @field_validator("bio")
    @classmethod
    def _bio(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if len(value.strip()) > 500:
            raise ValueError("Bio is too long (maximum 500 characters)")
        return value.strip()

    @field_validator("location")
    @classmethod
    def _location(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if len(value.strip()) > 100:
            raise ValueError("Location is too long (maximum 100 characters)")
        return value.strip()

    @field_validator("website", mode="before")
    @classmethod
    def _website(cls, value: Any) -> Optional[str]:
        return _optional_url(value, "Invalid website URL format")

    @field_validator("image", mode="before")
    @classmethod
    def _image(cls, value: Any) -> Optional[str]:
        return _optional_url(value, "Invalid image URL format")

    def changes(self) -> dict[str, Optional[str]]:
        """Fields the caller actually sent, by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SignUpInput(InputSchema):
    """Credentials sign-up."""

    email: EmailStr
    password: str
    name: str
    username: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> Any:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(value) > 100:
            raise ValueError("Password is too long (maximum 100 characters)")
        if not (
            re.search(r"[a-z]", value)
            and re.search(r"[A-Z]", value)
            and re.search(r"\d", value)
        ):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _bounded_text(
            value,
            empty="Name is required",
            too_long="Name is too long (maximum 100 characters)",
            max_length=100,
        )

    @field_validator("username")
    @classmethod
    def _username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters")
        if len(value) > 30:
            raise ValueError("Username is too long (maximum 30 characters)")
        if not USERNAME_PATTERN.match(value):
            raise ValueError(
                "Username can only contain letters, numbers, underscores, and hyphens"
            )
        return value


class SignInInput(InputSchema):
    """Credentials sign-in."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> Any:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


# ═══════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════════


class GetNotificationsInput(_PagedInput):
    """Inbox page request."""

    limit: int = Field(default=DEFAULT_NOTIFICATION_PAGE_SIZE)
    unread_only: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of safe_validate(): exactly one of data / error is set."""

    success: bool
    data: Optional[ModelT] = None
    error: Optional[ValidationError] = None


def validate(model: Type[ModelT], raw: Any) -> ModelT:
    """
    Parse ``raw`` into ``model``.

    Args:
        model: Input schema class
        raw: Mapping (or an instance of ``model``)

    Returns:
        Validated instance

    Raises:
        ValidationError: With details.errors as {field: [messages]}
    """
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        raise validation_error_from_pydantic(exc) from exc


def safe_validate(model: Type[ModelT], raw: Any) -> ValidationResult[ModelT]:
    """
    Like validate(), but returns a result object instead of raising.

    Example:
        result = safe_validate(CreatePostInput, {"content": ""})
        result.success        # False
        result.error.errors   # {"content": ["Post cannot be empty"]}
    """
    try:
        return ValidationResult(success=True, data=validate(model, raw))
    except ValidationError as exc:
        return ValidationResult(success=False, error=exc)
