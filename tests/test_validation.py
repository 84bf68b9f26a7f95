"""Tests for the input value objects."""

import pytest

from agora.shared.core.exceptions import ValidationError
from agora.shared.schemas.validation import (
    MAX_POST_LENGTH,
    CreateCommentInput,
    CreatePostInput,
    FollowUserInput,
    GetFeedInput,
    GetNotificationsInput,
    SignInInput,
    SignUpInput,
    ToggleLikeInput,
    UpdateProfileInput,
    safe_validate,
    validate,
)


# ═══════════════════════════════════════════════════════════════════════════════
# POSTS
# ═══════════════════════════════════════════════════════════════════════════════


def test_post_content_is_trimmed():
    data = validate(CreatePostInput, {"content": "  hello  "})

    assert data.content == "hello"
    assert data.image is None


def test_post_content_at_max_length_is_accepted():
    data = validate(CreatePostInput, {"content": "a" * MAX_POST_LENGTH})

    assert len(data.content) == 5000


def test_post_content_over_max_length_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate(CreatePostInput, {"content": "a" * (MAX_POST_LENGTH + 1)})

    assert exc_info.value.message == "Post is too long (maximum 5000 characters)"
    assert exc_info.value.field_errors("content") == [
        "Post is too long (maximum 5000 characters)"
    ]


def test_whitespace_only_post_is_empty():
    result = safe_validate(CreatePostInput, {"content": " \n\t "})

    assert result.success is False
    assert result.data is None
    assert result.error.errors == {"content": ["Post cannot be empty"]}


def test_padding_does_not_count_towards_length():
    data = validate(CreatePostInput, {"content": "  " + "a" * MAX_POST_LENGTH + "  "})

    assert len(data.content) == MAX_POST_LENGTH


@pytest.mark.parametrize("image", ["", "   ", None])
def test_blank_image_means_no_image(image):
    assert validate(CreatePostInput, {"content": "x", "image": image}).image is None


def test_image_must_be_url():
    with pytest.raises(ValidationError) as exc_info:
        validate(CreatePostInput, {"content": "x", "image": "not a url"})

    assert exc_info.value.message == "Invalid image URL"


def test_image_url_is_kept():
    url = "https://cdn.example.com/a.png"

    assert validate(CreatePostInput, {"content": "x", "image": url}).image == url


def test_comment_rules():
    assert validate(CreateCommentInput, {"postId": "p1", "content": " hi "}).content == "hi"

    with pytest.raises(ValidationError) as exc_info:
        validate(CreateCommentInput, {"post_id": "p1", "content": "a" * 1001})
    assert exc_info.value.message == "Comment is too long (maximum 1000 characters)"

    with pytest.raises(ValidationError) as exc_info:
        validate(CreateCommentInput, {"post_id": "", "content": "hi"})
    assert exc_info.value.message == "Post ID is required"


def test_toggle_like_requires_ids():
    with pytest.raises(ValidationError):
        validate(ToggleLikeInput, {"post_id": "p1", "user_id": ""})


def test_follow_requires_ids():
    with pytest.raises(ValidationError) as exc_info:
        validate(FollowUserInput, {"follower_id": "u1", "following_id": " "})

    assert exc_info.value.message == "User ID is required"


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


def test_feed_defaults():
    data = validate(GetFeedInput, {})

    assert data.limit == 10
    assert data.cursor is None


def test_feed_limit_none_uses_default():
    assert validate(GetFeedInput, {"limit": None}).limit == 10


@pytest.mark.parametrize(
    "limit, message",
    [(0, "Limit must be positive"), (-5, "Limit must be positive"), (51, "Limit cannot exceed 50")],
)
def test_feed_limit_bounds(limit, message):
    with pytest.raises(ValidationError) as exc_info:
        validate(GetFeedInput, {"limit": limit})

    assert exc_info.value.message == message


def test_blank_cursor_is_no_cursor():
    assert validate(GetFeedInput, {"cursor": ""}).cursor is None


def test_notifications_default_page_size():
    data = validate(GetNotificationsInput, {})

    assert data.limit == 20
    assert data.unread_only is False


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILES & AUTH
# ═══════════════════════════════════════════════════════════════════════════════


def test_profile_update_only_reports_sent_fields():
    data = validate(UpdateProfileInput, {"bio": "", "name": " Jane "})

    assert data.changes() == {"bio": None, "name": "Jane"}


def test_profile_update_rejects_long_bio_and_bad_website():
    with pytest.raises(ValidationError) as exc_info:
        validate(UpdateProfileInput, {"bio": "b" * 501, "website": "nope"})

    errors = exc_info.value.errors
    assert errors["bio"] == ["Bio is too long (maximum 500 characters)"]
    assert errors["website"] == ["Invalid website URL format"]


def test_profile_name_cannot_be_blank():
    with pytest.raises(ValidationError) as exc_info:
        validate(UpdateProfileInput, {"name": "  "})

    assert exc_info.value.message == "Name cannot be empty"


def test_sign_up_normalizes_email():
    data = validate(
        SignUpInput,
        {"email": "  Jane@Example.COM ", "password": "Passw0rd!", "name": "Jane"},
    )

    assert data.email == "jane@example.com"


@pytest.mark.parametrize(
    "password, message",
    [
        ("Sh0rt", "Password must be at least 8 characters long"),
        ("alllowercase1", "Password must contain at least one uppercase letter, "
                          "one lowercase letter, and one number"),
        ("NoDigitsHere", "Password must contain at least one uppercase letter, "
                         "one lowercase letter, and one number"),
    ],
)
def test_sign_up_password_rules(password, message):
    with pytest.raises(ValidationError) as exc_info:
        validate(SignUpInput, {"email": "a@example.com", "password": password, "name": "A"})

    assert exc_info.value.message == message


def test_sign_up_username_rules():
    with pytest.raises(ValidationError) as exc_info:
        validate(
            SignUpInput,
            {"email": "a@example.com", "password": "Passw0rd!", "name": "A", "username": "a b"},
        )

    assert exc_info.value.errors == {
        "username": ["Username can only contain letters, numbers, underscores, and hyphens"]
    }


def test_sign_in_requires_password():
    with pytest.raises(ValidationError) as exc_info:
        validate(SignInInput, {"email": "a@example.com", "password": ""})

    assert exc_info.value.message == "Password is required"


def test_validate_passes_instances_through():
    data = CreatePostInput(content="hello")

    assert validate(CreatePostInput, data) is data
