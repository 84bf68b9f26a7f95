"""Tests for SqlAlchemyPostRepository against an in-memory database."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from agora.shared.core.exceptions import PostNotFoundError, ValidationError
from agora.shared.models import Comment, Like, Notification, NotificationType
from tests.conftest import BASE_TIME


async def count_rows(db, model, *criteria) -> int:
    query = select(func.count()).select_from(model)
    if criteria:
        query = query.where(*criteria)
    return (await db.execute(query)).scalar()


# ═══════════════════════════════════════════════════════════════════════════════
# POSTS & FEED
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_returns_post_with_zero_counts(post_repo, make_user):
    author = await make_user()

    post = await post_repo.create(author_id=author.id, content="hello", image=None)

    assert post.content == "hello"
    assert post.author_id == author.id
    assert post.author.username == author.username
    assert post.like_count == 0
    assert post.comment_count == 0
    assert post.has_liked is False


@pytest.mark.asyncio
async def test_find_by_id_unknown_is_none(post_repo):
    assert await post_repo.find_by_id("missing") is None


@pytest.mark.asyncio
async def test_feed_pages_fifteen_posts_as_ten_plus_five(post_repo, make_user, make_post):
    author = await make_user()
    posts = [await make_post(author) for _ in range(15)]
    newest_first = [post.id for post in reversed(posts)]

    first = await post_repo.get_feed(cursor=None, limit=10)
    second = await post_repo.get_feed(cursor=first.next_cursor, limit=10)

    assert [p.id for p in first.items] == newest_first[:10]
    assert first.has_next_page is True
    assert first.next_cursor == newest_first[9]

    assert [p.id for p in second.items] == newest_first[10:]
    assert second.has_next_page is False
    assert second.next_cursor is None


@pytest.mark.asyncio
async def test_feed_orders_same_timestamp_by_id(post_repo, make_user, make_post):
    author = await make_user()
    posts = [await make_post(author, offset=0) for _ in range(3)]
    expected = sorted((post.id for post in posts), reverse=True)

    first = await post_repo.get_feed(cursor=None, limit=2)
    second = await post_repo.get_feed(cursor=first.next_cursor, limit=2)

    assert [p.id for p in first.items + second.items] == expected


@pytest.mark.asyncio
async def test_feed_with_unknown_cursor_is_rejected(post_repo):
    with pytest.raises(ValidationError) as exc_info:
        await post_repo.get_feed(cursor="does-not-exist", limit=10)

    assert exc_info.value.message == "Invalid cursor"


@pytest.mark.asyncio
async def test_feed_counts_and_has_liked(post_repo, make_user, make_post):
    author = await make_user()
    viewer = await make_user()
    post = await make_post(author)
    await post_repo.toggle_like(post.id, viewer.id)
    await post_repo.create_comment(post.id, "nice", viewer.id)

    as_viewer = await post_repo.get_feed(cursor=None, limit=10, current_user_id=viewer.id)
    as_author = await post_repo.get_feed(cursor=None, limit=10, current_user_id=author.id)
    anonymous = await post_repo.get_feed(cursor=None, limit=10)

    item = as_viewer.items[0]
    assert item.like_count == 1
    assert item.comment_count == 1
    assert item.has_liked is True
    assert as_author.items[0].has_liked is False
    assert anonymous.items[0].has_liked is False


@pytest.mark.asyncio
async def test_user_posts_only_include_author(post_repo, make_user, make_post):
    alice = await make_user()
    bob = await make_user()
    await make_post(alice)
    bob_post = await make_post(bob)

    page = await post_repo.get_user_posts(user_id=bob.id, cursor=None, limit=10)

    assert [p.id for p in page.items] == [bob_post.id]


@pytest.mark.asyncio
async def test_liked_posts_ordered_by_like_time(db, post_repo, make_user, make_post):
    author = await make_user()
    fan = await make_user()
    older = await make_post(author)
    newer = await make_post(author)
    # the newer post was liked first, the older one later
    db.add_all(
        [
            Like(user_id=fan.id, post_id=newer.id, created_at=BASE_TIME + timedelta(hours=1)),
            Like(user_id=fan.id, post_id=older.id, created_at=BASE_TIME + timedelta(hours=2)),
        ]
    )
    await db.commit()

    first = await post_repo.get_user_liked_posts(user_id=fan.id, cursor=None, limit=1)
    second = await post_repo.get_user_liked_posts(
        user_id=fan.id, cursor=first.next_cursor, limit=1
    )

    assert [p.id for p in first.items] == [older.id]
    assert [p.id for p in second.items] == [newer.id]
    assert second.has_next_page is False


# ═══════════════════════════════════════════════════════════════════════════════
# LIKES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_toggle_like_twice_returns_to_original_state(db, post_repo, make_user, make_post):
    author = await make_user()
    fan = await make_user()
    post = await make_post(author)

    liked = await post_repo.toggle_like(post.id, fan.id)
    unliked = await post_repo.toggle_like(post.id, fan.id)

    assert (liked.liked, liked.like_count) == (True, 1)
    assert (unliked.liked, unliked.like_count) == (False, 0)
    assert await post_repo.has_user_liked(post.id, fan.id) is False
    assert await count_rows(db, Like) == 0
    assert await count_rows(db, Notification) == 0


@pytest.mark.asyncio
async def test_like_notifies_author(db, post_repo, make_user, make_post):
    author = await make_user()
    fan = await make_user()
    post = await make_post(author)

    await post_repo.toggle_like(post.id, fan.id)

    notification = (await db.execute(select(Notification))).scalar_one()
    assert notification.type == NotificationType.LIKE
    assert notification.user_id == author.id
    assert notification.creator_id == fan.id
    assert notification.post_id == post.id
    assert notification.read is False


@pytest.mark.asyncio
async def test_liking_own_post_creates_no_notification(db, post_repo, make_user, make_post):
    author = await make_user()
    post = await make_post(author)

    result = await post_repo.toggle_like(post.id, author.id)

    assert result.liked is True
    assert await count_rows(db, Notification) == 0


@pytest.mark.asyncio
async def test_unlike_removes_only_that_actors_notification(db, post_repo, make_user, make_post):
    author = await make_user()
    fan_a = await make_user()
    fan_b = await make_user()
    post = await make_post(author)
    await post_repo.toggle_like(post.id, fan_a.id)
    await post_repo.toggle_like(post.id, fan_b.id)

    result = await post_repo.toggle_like(post.id, fan_a.id)

    assert result.like_count == 1
    remaining = (await db.execute(select(Notification))).scalars().all()
    assert [n.creator_id for n in remaining] == [fan_b.id]


@pytest.mark.asyncio
async def test_liking_missing_post_raises_not_found(post_repo, make_user):
    fan = await make_user()

    with pytest.raises(PostNotFoundError):
        await post_repo.toggle_like("missing", fan.id)


@pytest.mark.asyncio
async def test_like_is_rolled_back_when_notification_fails(
    db, post_repo, make_user, make_post, failing_notification_writes
):
    author = await make_user()
    fan_id = (await make_user()).id
    post_id = (await make_post(author)).id

    with pytest.raises(RuntimeError):
        await post_repo.toggle_like(post_id, fan_id)

    assert await count_rows(db, Like) == 0
    assert await count_rows(db, Notification) == 0
    assert await post_repo.has_user_liked(post_id, fan_id) is False


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_comment_notifies_author_with_comment_id(db, post_repo, make_user, make_post):
    author = await make_user()
    commenter = await make_user()
    post = await make_post(author)

    comment = await post_repo.create_comment(post.id, "great post", commenter.id)

    assert comment.content == "great post"
    assert comment.author.id == commenter.id
    notification = (await db.execute(select(Notification))).scalar_one()
    assert notification.type == NotificationType.COMMENT
    assert notification.comment_id == comment.id
    assert notification.user_id == author.id


@pytest.mark.asyncio
async def test_commenting_own_post_creates_no_notification(db, post_repo, make_user, make_post):
    author = await make_user()
    post = await make_post(author)

    await post_repo.create_comment(post.id, "bump", author.id)

    assert await count_rows(db, Comment) == 1
    assert await count_rows(db, Notification) == 0


@pytest.mark.asyncio
async def test_comment_on_missing_post_raises_not_found(db, post_repo, make_user):
    commenter = await make_user()

    with pytest.raises(PostNotFoundError):
        await post_repo.create_comment("missing", "hello", commenter.id)

    assert await count_rows(db, Comment) == 0


@pytest.mark.asyncio
async def test_comment_is_rolled_back_when_notification_fails(
    db, post_repo, make_user, make_post, failing_notification_writes
):
    author = await make_user()
    commenter_id = (await make_user()).id
    post_id = (await make_post(author)).id

    with pytest.raises(RuntimeError):
        await post_repo.create_comment(post_id, "great post", commenter_id)

    assert await count_rows(db, Comment) == 0
    assert await count_rows(db, Notification) == 0


@pytest.mark.asyncio
async def test_comments_are_oldest_first(post_repo, make_user, make_post):
    author = await make_user()
    post = await make_post(author)
    first = await post_repo.create_comment(post.id, "first", author.id)
    second = await post_repo.create_comment(post.id, "second", author.id)

    page = await post_repo.get_comments(post.id, cursor=None, limit=1)
    rest = await post_repo.get_comments(post.id, cursor=page.next_cursor, limit=1)

    assert [c.id for c in page.items] == [first.id]
    assert [c.id for c in rest.items] == [second.id]


# ═══════════════════════════════════════════════════════════════════════════════
# DELETE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_delete_removes_post_and_its_notifications(db, post_repo, make_user, make_post):
    author = await make_user()
    fan = await make_user()
    post = await make_post(author)
    other = await make_post(author)
    await post_repo.toggle_like(post.id, fan.id)
    await post_repo.create_comment(post.id, "hi", fan.id)
    await post_repo.toggle_like(other.id, fan.id)

    assert await post_repo.delete(post.id) is True

    assert await post_repo.exists(post.id) is False
    assert await count_rows(db, Notification, Notification.post_id == post.id) == 0
    assert await count_rows(db, Like, Like.post_id == post.id) == 0
    assert await count_rows(db, Comment, Comment.post_id == post.id) == 0
    # the other post's notification survives
    assert await count_rows(db, Notification) == 1


@pytest.mark.asyncio
async def test_delete_missing_post_returns_false(post_repo):
    assert await post_repo.delete("missing") is False


@pytest.mark.asyncio
async def test_get_author_id(post_repo, make_user, make_post):
    author = await make_user()
    post = await make_post(author)

    assert await post_repo.get_author_id(post.id) == author.id
    assert await post_repo.get_author_id("missing") is None
