"""
Post Repository

Database operations for posts, likes and comments.

Post Row Shape:
===============
Every read returns PostWithDetails, built from one SELECT:

    SELECT posts.*, users.* (author),
           (SELECT COUNT(*) FROM likes    WHERE likes.post_id    = posts.id) AS like_count,
           (SELECT COUNT(*) FROM comments WHERE comments.post_id = posts.id) AS comment_count,
           EXISTS (SELECT 1 FROM likes WHERE post_id = posts.id AND user_id = :viewer) AS has_liked
    FROM posts JOIN users ON users.id = posts.author_id

Like and comment collections are never loaded to compute counts.

Toggle Like:
============
    ┌──────────────┐  toggle_like  ┌──────────────┐
    │   Unliked    │ ────────────▶ │    Liked     │
    │              │ ◀──────────── │              │
    └──────────────┘  toggle_like  └──────────────┘

    like:   INSERT like + INSERT notification (unless liking own post)  ← one transaction
    unlike: DELETE like + DELETE LIKE notifications from this actor     ← one transaction
    then:   like_count read after commit

Usage:
======
    repo = SqlAlchemyPostRepository(db)

    page = await repo.get_feed(cursor=None, limit=10, current_user_id=viewer_id)
    result = await repo.toggle_like(post_id, user_id)  # LikeResult(liked=True, like_count=1)
"""

from typing import Any, Optional

from sqlalchemy import Select, delete, exists, func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from agora.shared.core.exceptions import PostNotFoundError
from agora.shared.core.logging import db_logger
from agora.shared.db.unit_of_work import atomic
from agora.shared.models import Comment, Like, Notification, NotificationType, Post
from agora.shared.repositories.base import BaseRepository
from agora.shared.repositories.interfaces import PostRepository
from agora.shared.schemas.common import AuthorSummary
from agora.shared.schemas.post import CommentWithAuthor, LikeResult, PostWithDetails
from agora.shared.utils.pagination import PaginatedResult, apply_cursor, paginate


class SqlAlchemyPostRepository(BaseRepository[Post], PostRepository):
    """
    Repository for Post, Like and Comment rows.

    Methods:
        create: Insert a post
        find_by_id: One post with details
        get_feed / get_user_posts / get_user_liked_posts: Cursor pages
        delete: Post and its notifications, atomically
        toggle_like: Like / unlike with notification side effect
        get_comments / create_comment: Comment thread
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY BUILDING
    # ═══════════════════════════════════════════════════════════════════════════

    def _details_query(self, current_user_id: Optional[str]) -> Select:
        """SELECT of Post plus aggregate counts and the viewer's like flag."""
        like_count = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        if current_user_id:
            has_liked: Any = (
                exists()
                .where(Like.post_id == Post.id, Like.user_id == current_user_id)
                .correlate(Post)
            )
        else:
            has_liked = literal(False)

        return select(
            Post,
            like_count.label("like_count"),
            comment_count.label("comment_count"),
            has_liked.label("has_liked"),
        ).options(joinedload(Post.author))

    @staticmethod
    def _to_details(row: Any) -> PostWithDetails:
        post: Post = row[0]
        return PostWithDetails(
            id=post.id,
            content=post.content,
            image=post.image,
            created_at=post.created_at,
            updated_at=post.updated_at,
            author_id=post.author_id,
            author=AuthorSummary.model_validate(post.author),
            like_count=row.like_count or 0,
            comment_count=row.comment_count or 0,
            has_liked=bool(row.has_liked),
        )

    async def _page(self, query: Select, limit: int) -> PaginatedResult[PostWithDetails]:
        result = await self.session.execute(query.limit(limit + 1))
        return paginate([self._to_details(row) for row in result.all()], limit)

    async def _count_likes(self, post_id: str) -> int:
        result = await self.session.execute(
            select(func.count(Like.id)).where(Like.post_id == post_id)
        )
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # POSTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        author_id: str,
        content: str,
        image: Optional[str] = None,
    ) -> PostWithDetails:
        """
        Insert a post.

        Returns:
            The new post with zero counts
        """
        post = Post(author_id=author_id, content=content, image=image)
        async with atomic(self.session, resource="Post"):
            await self.add(post)

        db_logger.info("Post created", post_id=post.id, author_id=author_id)
        created = await self.find_by_id(post.id, current_user_id=author_id)
        if created is None:
            raise PostNotFoundError(post.id)
        return created

    async def find_by_id(
        self,
        post_id: str,
        current_user_id: Optional[str] = None,
    ) -> Optional[PostWithDetails]:
        """
        One post with author, counts and has_liked.

        Returns:
            PostWithDetails or None
        """
        result = await self.session.execute(
            self._details_query(current_user_id).where(Post.id == post_id)
        )
        row = result.first()
        return self._to_details(row) if row else None

    async def get_feed(
        self,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """
        Global feed, newest first.

        Args:
            cursor: Id of the last post of the previous page
            limit: Page size
            current_user_id: Viewer, for has_liked

        Raises:
            ValidationError: Unknown cursor
        """
        cursor_post = await self.cursor_row(Post, cursor)
        query = apply_cursor(self._details_query(current_user_id), Post, cursor_post)
        return await self._page(query, limit)

    async def get_user_posts(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """Posts by ``user_id``, newest first."""
        cursor_post = await self.cursor_row(Post, cursor)
        query = self._details_query(current_user_id).where(Post.author_id == user_id)
        return await self._page(apply_cursor(query, Post, cursor_post), limit)

    async def get_user_liked_posts(
        self,
        user_id: str,
        cursor: Optional[str],
        limit: int,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """
        Posts liked by ``user_id``, ordered by when they were liked.

        The cursor is still a post id; it is resolved to the Like row of
        ``user_id`` for that post.
        """
        cursor_like = await self.cursor_row(
            Like, cursor, Like.user_id == user_id, Like.post_id == cursor
        )
        query = (
            self._details_query(current_user_id)
            .join(Like, Like.post_id == Post.id)
            .where(Like.user_id == user_id)
        )
        return await self._page(apply_cursor(query, Like, cursor_like), limit)

    async def delete(self, post_id: str) -> bool:
        """
        Delete a post with its notifications, comments and likes.

        Returns:
            True if deleted, False if the post did not exist
        """
        if not await self.exists(post_id):
            return False

        async with atomic(self.session, resource="Post"):
            await self.session.execute(delete(Notification).where(Notification.post_id == post_id))
            await self.session.execute(delete(Comment).where(Comment.post_id == post_id))
            await self.session.execute(delete(Like).where(Like.post_id == post_id))
            await self.session.execute(delete(Post).where(Post.id == post_id))

        db_logger.info("Post deleted", post_id=post_id)
        return True

    async def exists(self, post_id: str) -> bool:
        """Whether the post exists."""
        return await self.exists_by_id(post_id)

    async def get_author_id(self, post_id: str) -> Optional[str]:
        """Author id, or None for an unknown post."""
        result = await self.session.execute(select(Post.author_id).where(Post.id == post_id))
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # LIKES
    # ═══════════════════════════════════════════════════════════════════════════

    async def has_user_liked(self, post_id: str, user_id: str) -> bool:
        """Single-row existence check."""
        result = await self.session.execute(
            select(exists().where(Like.post_id == post_id, Like.user_id == user_id))
        )
        return bool(result.scalar())

    async def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        """
        Flip the like state of (user, post).

        Liking writes the Like and, unless the user wrote the post, a LIKE
        notification for the author. Unliking removes the Like and the LIKE
        notifications this user created for this post. Either branch is a
        single transaction.

        Returns:
            LikeResult with the like count read after commit

        Raises:
            PostNotFoundError: Liking an unknown post
            ConflictError: A concurrent request created the same Like first
        """
        result = await self.session.execute(
            select(Like.id).where(Like.post_id == post_id, Like.user_id == user_id)
        )
        like_id = result.scalar_one_or_none()

        if like_id is not None:
            async with atomic(self.session, resource="Like"):
                await self.session.execute(delete(Like).where(Like.id == like_id))
                await self.session.execute(
                    delete(Notification).where(
                        Notification.type == NotificationType.LIKE,
                        Notification.post_id == post_id,
                        Notification.creator_id == user_id,
                    )
                )
            liked = False
        else:
            author_id = await self.get_author_id(post_id)
            if author_id is None:
                raise PostNotFoundError(post_id)

            async with atomic(self.session, "Post already liked", resource="Like"):
                self.session.add(Like(user_id=user_id, post_id=post_id))
                if author_id != user_id:
                    self.session.add(
                        Notification(
                            type=NotificationType.LIKE,
                            user_id=author_id,
                            creator_id=user_id,
                            post_id=post_id,
                        )
                    )
            liked = True

        like_count = await self._count_likes(post_id)
        db_logger.info("Like toggled", post_id=post_id, user_id=user_id, liked=liked)
        return LikeResult(liked=liked, like_count=like_count)

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_comments(
        self,
        post_id: str,
        cursor: Optional[str],
        limit: int,
    ) -> PaginatedResult[CommentWithAuthor]:
        """Comment thread, oldest first."""
        cursor_comment = await self.cursor_row(Comment, cursor)
        query = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .options(joinedload(Comment.author))
        )
        query = apply_cursor(query, Comment, cursor_comment, ascending=True)
        result = await self.session.execute(query.limit(limit + 1))
        comments = [CommentWithAuthor.model_validate(c) for c in result.scalars().all()]
        return paginate(comments, limit)

    async def create_comment(
        self,
        post_id: str,
        content: str,
        author_id: str,
    ) -> CommentWithAuthor:
        """
        Insert a comment and, unless the commenter wrote the post, a COMMENT
        notification for the post author, in one transaction.

        Raises:
            PostNotFoundError: Unknown post
        """
        post_author_id = await self.get_author_id(post_id)
        if post_author_id is None:
            raise PostNotFoundError(post_id)

        comment = Comment(post_id=post_id, content=content, author_id=author_id)
        async with atomic(self.session, resource="Comment"):
            self.session.add(comment)
            # comment.id is assigned on flush
            await self.session.flush()
            if post_author_id != author_id:
                self.session.add(
                    Notification(
                        type=NotificationType.COMMENT,
                        user_id=post_author_id,
                        creator_id=author_id,
                        post_id=post_id,
                        comment_id=comment.id,
                    )
                )

        db_logger.info("Comment created", comment_id=comment.id, post_id=post_id)
        result = await self.session.execute(
            select(Comment).where(Comment.id == comment.id).options(joinedload(Comment.author))
        )
        return CommentWithAuthor.model_validate(result.scalar_one())
