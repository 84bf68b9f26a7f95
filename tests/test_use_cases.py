"""
Use case tests.

Repositories are replaced by AsyncMock doubles specced on the repository
interfaces, so each test checks the business rule and the single repository
call it leads to.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from agora.shared.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    NotificationNotFoundError,
    PostNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from agora.shared.models import NotificationType
from agora.shared.repositories.interfaces import (
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from agora.shared.schemas.common import AuthorSummary
from agora.shared.schemas.notification import NotificationWithDetails
from agora.shared.schemas.post import PostWithDetails
from agora.shared.schemas.user import FollowResult, UserAuthRecord, UserProfile, UserPublic
from agora.shared.use_cases import (
    CreatePostUseCase,
    DeletePostUseCase,
    EnsureUsernameUseCase,
    FollowUserUseCase,
    GetCommentsUseCase,
    GetFeedUseCase,
    GetNotificationsUseCase,
    GetPostUseCase,
    GetUserProfileUseCase,
    MarkAllNotificationsAsReadUseCase,
    MarkNotificationAsReadUseCase,
    ResolveIdentityUseCase,
    SignInUseCase,
    SignUpUseCase,
    UpdateProfileUseCase,
)
from agora.shared.use_cases.users import allocate_username, base_username_from_email
from agora.shared.utils.pagination import PaginatedResult
from agora.shared.utils.security import SecurityUtils


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def posts() -> AsyncMock:
    return AsyncMock(spec=PostRepository)


@pytest.fixture
def users() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def notifications() -> AsyncMock:
    return AsyncMock(spec=NotificationRepository)


def a_post(post_id: str = "p1", author_id: str = "u1") -> PostWithDetails:
    return PostWithDetails(
        id=post_id,
        content="hello",
        created_at=NOW,
        updated_at=NOW,
        author_id=author_id,
        author=AuthorSummary(id=author_id, username="jane"),
    )


def a_profile(user_id: str = "u1", username: str = "jane", **overrides) -> UserProfile:
    return UserProfile(
        id=user_id,
        email=f"{username}@example.com",
        username=username,
        name="Jane",
        created_at=NOW,
        **overrides,
    )


def a_notification(notification_id: str = "n1", user_id: str = "u1") -> NotificationWithDetails:
    return NotificationWithDetails(
        id=notification_id,
        type=NotificationType.FOLLOW,
        read=False,
        created_at=NOW,
        user_id=user_id,
        creator=AuthorSummary(id="u2"),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# POSTS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_post_trims_and_drops_blank_image(posts):
    posts.create.return_value = a_post()

    await CreatePostUseCase(posts).execute(author_id="u1", content="  hello  ", image="  ")

    posts.create.assert_awaited_once_with(author_id="u1", content="hello", image=None)


@pytest.mark.asyncio
async def test_create_post_rejects_blank_content_without_storage(posts):
    with pytest.raises(ValidationError) as exc_info:
        await CreatePostUseCase(posts).execute(author_id="u1", content="   ")

    assert exc_info.value.message == "Post cannot be empty"
    posts.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_post_requires_author(posts):
    with pytest.raises(ValidationError):
        await CreatePostUseCase(posts).execute(author_id="", content="hello")


@pytest.mark.asyncio
async def test_get_post_unknown_raises_not_found(posts):
    posts.find_by_id.return_value = None

    with pytest.raises(PostNotFoundError):
        await GetPostUseCase(posts).execute("missing")


@pytest.mark.asyncio
async def test_get_post_blank_id_is_rejected_before_lookup(posts):
    with pytest.raises(ValidationError) as exc_info:
        await GetPostUseCase(posts).execute("   ")

    assert exc_info.value.message == "Post ID is required"
    posts.find_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_feed_defaults_to_ten(posts):
    posts.get_feed.return_value = PaginatedResult(items=[])

    await GetFeedUseCase(posts).execute(current_user_id="u1")

    posts.get_feed.assert_awaited_once_with(cursor=None, limit=10, current_user_id="u1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "limit,message",
    [(0, "Limit must be positive"), (51, "Limit cannot exceed 50")],
)
async def test_feed_limit_bounds(posts, limit, message):
    with pytest.raises(ValidationError) as exc_info:
        await GetFeedUseCase(posts).execute(limit=limit)

    assert exc_info.value.message == message
    posts.get_feed.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_post_by_author(posts):
    posts.get_author_id.return_value = "u1"
    posts.delete.return_value = True

    result = await DeletePostUseCase(posts).execute(post_id="p1", user_id="u1")

    assert result.id == "p1"
    assert result.deleted is True
    posts.delete.assert_awaited_once_with("p1")


@pytest.mark.asyncio
async def test_delete_post_by_someone_else_is_forbidden(posts):
    posts.get_author_id.return_value = "u1"

    with pytest.raises(ForbiddenError):
        await DeletePostUseCase(posts).execute(post_id="p1", user_id="intruder")

    posts.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_unknown_post(posts):
    posts.get_author_id.return_value = None

    with pytest.raises(PostNotFoundError):
        await DeletePostUseCase(posts).execute(post_id="missing", user_id="u1")


@pytest.mark.asyncio
async def test_comments_of_unknown_post(posts):
    posts.exists.return_value = False

    with pytest.raises(PostNotFoundError):
        await GetCommentsUseCase(posts).execute("missing")

    posts.get_comments.assert_not_awaited()


@pytest.mark.asyncio
async def test_comments_blank_post_id_is_rejected_before_lookup(posts):
    with pytest.raises(ValidationError) as exc_info:
        await GetCommentsUseCase(posts).execute("")

    assert exc_info.value.message == "Post ID is required"
    posts.exists.assert_not_awaited()


# ═══════════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_self_follow_rejected_before_storage(users):
    with pytest.raises(ValidationError) as exc_info:
        await FollowUserUseCase(users).execute(follower_id="u1", following_id="u1")

    assert exc_info.value.message == "Cannot follow yourself"
    users.toggle_follow.assert_not_awaited()


@pytest.mark.asyncio
async def test_follow_delegates_to_repository(users):
    users.toggle_follow.return_value = FollowResult(following=True, follower_count=1)

    result = await FollowUserUseCase(users).execute(follower_id="u1", following_id="u2")

    assert result.following is True
    users.toggle_follow.assert_awaited_once_with("u1", "u2")


@pytest.mark.asyncio
async def test_profile_sets_is_following_for_other_viewer(users):
    users.find_by_username.return_value = a_profile()
    users.is_following.return_value = True

    profile = await GetUserProfileUseCase(users).execute("jane", current_user_id="u2")

    assert profile.is_following is True
    users.is_following.assert_awaited_once_with("u2", "u1")


@pytest.mark.asyncio
async def test_own_profile_skips_is_following(users):
    users.find_by_username.return_value = a_profile()

    profile = await GetUserProfileUseCase(users).execute("jane", current_user_id="u1")

    assert profile.is_following is None
    users.is_following.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_profile(users):
    users.find_by_username.return_value = None

    with pytest.raises(NotFoundError) as exc_info:
        await GetUserProfileUseCase(users).execute("ghost")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_update_profile_passes_only_sent_fields(users):
    users.update_profile.return_value = a_profile(bio="Hi")

    await UpdateProfileUseCase(users).execute("u1", {"bio": " Hi ", "website": ""})

    users.update_profile.assert_awaited_once_with("u1", {"bio": "Hi", "website": None})


@pytest.mark.asyncio
async def test_update_profile_rejects_bad_website(users):
    with pytest.raises(ValidationError) as exc_info:
        await UpdateProfileUseCase(users).execute("u1", {"website": "not a url"})

    assert exc_info.value.message == "Invalid website URL format"
    users.update_profile.assert_not_awaited()


def test_base_username_strips_non_handle_characters():
    assert base_username_from_email("jane.doe+news@example.com") == "janedoenews"
    assert base_username_from_email("...@example.com") == ""


@pytest.mark.asyncio
async def test_allocate_username_free_base(users):
    users.find_usernames_by_prefix.return_value = ["janet"]

    assert await allocate_username(users, "jane") == "jane"


@pytest.mark.asyncio
async def test_allocate_username_picks_first_free_suffix(users):
    users.find_usernames_by_prefix.return_value = ["jane", "jane1", "jane3"]

    assert await allocate_username(users, "jane") == "jane2"


@pytest.mark.asyncio
async def test_allocate_username_empty_base_uses_timestamp(users):
    handle = await allocate_username(users, "")

    assert handle.startswith("user")
    assert handle[4:].isdigit()
    users.find_usernames_by_prefix.assert_not_awaited()


@pytest.mark.asyncio
async def test_allocate_username_truncates_long_base(users):
    base = "a" * 40
    users.find_usernames_by_prefix.side_effect = [["a" * 30], ["a" * 26]]

    handle = await allocate_username(users, base)

    assert handle == "a" * 26 + "1"
    assert len(handle) <= 30


@pytest.mark.asyncio
async def test_ensure_username_keeps_existing_handle(users):
    users.find_by_id.return_value = a_profile()

    result = await EnsureUsernameUseCase(users).execute("u1")

    assert result.username == "jane"
    users.set_username.assert_not_awaited()


@pytest.mark.asyncio
async def test_ensure_username_assigns_from_email(users):
    users.find_by_id.return_value = a_profile(username=None).model_copy(
        update={"email": "jane.doe@example.com"}
    )
    users.find_usernames_by_prefix.return_value = []
    users.set_username.return_value = UserPublic(id="u1", email="jane.doe@example.com", username="janedoe")

    result = await EnsureUsernameUseCase(users).execute("u1")

    assert result.username == "janedoe"
    users.set_username.assert_awaited_once_with("u1", "janedoe")


# ═══════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_notifications_default_page_size(notifications):
    notifications.get_by_user_id.return_value = PaginatedResult(items=[])

    await GetNotificationsUseCase(notifications).execute("u1")

    notifications.get_by_user_id.assert_awaited_once_with(
        "u1", cursor=None, limit=20, unread_only=False
    )


@pytest.mark.asyncio
async def test_mark_someone_elses_notification_is_forbidden(notifications):
    notifications.find_by_id.return_value = a_notification(user_id="owner")

    with pytest.raises(ForbiddenError):
        await MarkNotificationAsReadUseCase(notifications).execute("n1", user_id="intruder")

    notifications.mark_as_read.assert_not_awaited()


@pytest.mark.asyncio
async def test_mark_unknown_notification(notifications):
    notifications.find_by_id.return_value = None

    with pytest.raises(NotificationNotFoundError):
        await MarkNotificationAsReadUseCase(notifications).execute("missing", user_id="u1")


@pytest.mark.asyncio
async def test_mark_own_notification(notifications):
    notifications.find_by_id.return_value = a_notification(user_id="u1")
    notifications.mark_as_read.return_value = True

    result = await MarkNotificationAsReadUseCase(notifications).execute("n1", user_id="u1")

    assert result.updated == 1


@pytest.mark.asyncio
async def test_mark_all_reports_count(notifications):
    notifications.mark_all_as_read.return_value = 4

    result = await MarkAllNotificationsAsReadUseCase(notifications).execute("u1")

    assert result.updated == 4


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_sign_up_with_registered_email_conflicts(users):
    users.exists_by_email.return_value = True

    with pytest.raises(ConflictError) as exc_info:
        await SignUpUseCase(users).execute(email="jane@example.com", password="Passw0rd!", name="Jane")

    assert exc_info.value.status_code == 409
    users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_up_hashes_password_and_issues_token(users):
    users.exists_by_email.return_value = False
    users.find_usernames_by_prefix.return_value = ["jane"]
    users.create.return_value = UserPublic(id="u1", email="jane@example.com", username="jane1")

    auth = await SignUpUseCase(users).execute(email=" Jane@Example.com ", password="Passw0rd!", name="Jane")

    kwargs = users.create.await_args.kwargs
    assert kwargs["email"] == "jane@example.com"
    assert kwargs["username"] == "jane1"
    assert SecurityUtils.verify_password("Passw0rd!", kwargs["password_hash"])
    assert SecurityUtils.decode_access_token(auth.access_token)["user_id"] == "u1"


@pytest.mark.asyncio
@pytest.mark.parametrize("stored_hash", [None, SecurityUtils.hash_password("Other1234")])
async def test_sign_in_invalid_credentials(users, stored_hash):
    users.find_by_email.return_value = (
        UserAuthRecord(id="u1", email="jane@example.com", password_hash=stored_hash)
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        await SignInUseCase(users).execute(email="jane@example.com", password="Passw0rd!")

    assert exc_info.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_sign_in_unknown_email(users):
    users.find_by_email.return_value = None

    with pytest.raises(UnauthorizedError):
        await SignInUseCase(users).execute(email="ghost@example.com", password="Passw0rd!")


@pytest.mark.asyncio
async def test_resolve_identity_for_deleted_user(users):
    token = SecurityUtils.create_access_token(user_id="u1", email="jane@example.com")
    users.find_by_id.return_value = None

    with pytest.raises(UnauthorizedError) as exc_info:
        await ResolveIdentityUseCase(users).execute(token)

    assert exc_info.value.message == "User no longer exists"


@pytest.mark.asyncio
async def test_resolve_identity(users):
    token = SecurityUtils.create_access_token(user_id="u1", email="jane@example.com")
    users.find_by_id.return_value = a_profile()

    identity = await ResolveIdentityUseCase(users).execute(token)

    assert identity.id == "u1"
    assert identity.username == "jane"
