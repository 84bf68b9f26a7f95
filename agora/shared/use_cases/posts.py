"""
Post Use Cases

One class per operation. Each use case validates its input with a value
object from schemas.validation, applies the rule storage cannot express,
and makes a single repository call.

Use Cases:
==========
    CreatePostUseCase          content 1..5000 after trim, optional image URL
    GetPostUseCase             404 for unknown ids
    GetFeedUseCase             limit 1..50, default 10
    GetUserPostsUseCase        a user's own posts
    GetUserLikedPostsUseCase   posts a user liked
    DeletePostUseCase          only the author may delete
    ToggleLikeUseCase          like ↔ unlike
    CreateCommentUseCase       content 1..1000 after trim
    GetCommentsUseCase         oldest first

Usage:
======
    use_case = CreatePostUseCase(post_repository)
    post = await use_case.execute(author_id=user.id, content="hello")
"""

from typing import Optional

from agora.shared.core.exceptions import ForbiddenError, PostNotFoundError, ValidationError
from agora.shared.core.logging import use_case_logger
from agora.shared.repositories.interfaces import PostRepository
from agora.shared.schemas.post import CommentWithAuthor, DeletedPost, LikeResult, PostWithDetails
from agora.shared.schemas.validation import (
    CreateCommentInput,
    CreatePostInput,
    DeletePostInput,
    GetFeedInput,
    PaginationInput,
    PostIdInput,
    ToggleLikeInput,
    validate,
)
from agora.shared.utils.pagination import PaginatedResult


def _require_user_id(user_id: Optional[str], field: str = "author_id") -> str:
    if not user_id or not user_id.strip():
        raise ValidationError.for_field(field, "User ID is required")
    return user_id


class CreatePostUseCase:
    """
    Publish a post.

    Rules:
        - content is trimmed; empty after trimming is rejected
        - content longer than 5000 characters is rejected
        - image, when given, must be an http(s) URL ("" means no image)
    """

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(
        self,
        author_id: str,
        content: str,
        image: Optional[str] = None,
    ) -> PostWithDetails:
        """
        Args:
            author_id: The signed-in user
            content: Raw post text
            image: Optional image URL

        Returns:
            The created post

        Raises:
            ValidationError: Content or image invalid, or author missing
        """
        author_id = _require_user_id(author_id)
        data = validate(CreatePostInput, {"content": content, "image": image})

        post = await self.post_repository.create(
            author_id=author_id,
            content=data.content,
            image=data.image,
        )
        use_case_logger.info("Post published", post_id=post.id, author_id=author_id)
        return post


class GetPostUseCase:
    """Fetch one post with details."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(self, post_id: str, current_user_id: Optional[str] = None) -> PostWithDetails:
        """
        Raises:
            PostNotFoundError: Unknown post
        """
        data = validate(PostIdInput, {"post_id": post_id})
        post = await self.post_repository.find_by_id(data.post_id, current_user_id)
        if post is None:
            raise PostNotFoundError(data.post_id)
        return post


class GetFeedUseCase:
    """
    Global feed page.

    Rules:
        - 1 <= limit <= 50, default 10
        - cursor and current_user_id are passed through unchanged
    """

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(
        self,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        """
        Raises:
            ValidationError: Limit out of range
        """
        data = validate(
            GetFeedInput,
            {"cursor": cursor, "limit": limit, "current_user_id": current_user_id},
        )
        return await self.post_repository.get_feed(
            cursor=data.cursor,
            limit=data.limit,
            current_user_id=data.current_user_id,
        )


class GetUserPostsUseCase:
    """Posts written by one user."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(
        self,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        user_id = _require_user_id(user_id, "user_id")
        page = validate(PaginationInput, {"cursor": cursor, "limit": limit})
        return await self.post_repository.get_user_posts(
            user_id=user_id,
            cursor=page.cursor,
            limit=page.limit,
            current_user_id=current_user_id,
        )


class GetUserLikedPostsUseCase:
    """Posts one user has liked."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(
        self,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        current_user_id: Optional[str] = None,
    ) -> PaginatedResult[PostWithDetails]:
        user_id = _require_user_id(user_id, "user_id")
        page = validate(PaginationInput, {"cursor": cursor, "limit": limit})
        return await self.post_repository.get_user_liked_posts(
            user_id=user_id,
            cursor=page.cursor,
            limit=page.limit,
            current_user_id=current_user_id,
        )


class DeletePostUseCase:
    """
    Delete a post.

    The ownership check lives here, not in the repository.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(self, post_id: str, user_id: str) -> DeletedPost:
        """
        Raises:
            PostNotFoundError: Unknown post
            ForbiddenError: Caller is not the author
        """
        user_id = _require_user_id(user_id, "user_id")
        data = validate(DeletePostInput, {"post_id": post_id})

        author_id = await self.post_repository.get_author_id(data.post_id)
        if author_id is None:
            raise PostNotFoundError(data.post_id)
        if author_id != user_id:
            raise ForbiddenError("You can only delete your own posts")

        await self.post_repository.delete(data.post_id)
        use_case_logger.info("Post removed", post_id=data.post_id, user_id=user_id)
        return DeletedPost(id=data.post_id)


class ToggleLikeUseCase:
    """
    Like or unlike a post.

    No rule beyond input validation; a missing post surfaces as the
    repository's NotFoundError.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(self, post_id: str, user_id: str) -> LikeResult:
        """
        Raises:
            ValidationError: Empty post or user id
            PostNotFoundError: Liking an unknown post
        """
        data = validate(ToggleLikeInput, {"post_id": post_id, "user_id": user_id})
        return await self.post_repository.toggle_like(data.post_id, data.user_id)


class CreateCommentUseCase:
    """Comment on a post."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(self, post_id: str, content: str, author_id: str) -> CommentWithAuthor:
        """
        Raises:
            ValidationError: Empty or too long content
            PostNotFoundError: Unknown post
        """
        author_id = _require_user_id(author_id)
        data = validate(CreateCommentInput, {"post_id": post_id, "content": content})
        return await self.post_repository.create_comment(
            post_id=data.post_id,
            content=data.content,
            author_id=author_id,
        )


class GetCommentsUseCase:
    """Comment thread of a post, oldest first."""

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def execute(
        self,
        post_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResult[CommentWithAuthor]:
        """
        Raises:
            PostNotFoundError: Unknown post
        """
        data = validate(PostIdInput, {"post_id": post_id})
        page = validate(PaginationInput, {"cursor": cursor, "limit": limit})
        if not await self.post_repository.exists(data.post_id):
            raise PostNotFoundError(data.post_id)
        return await self.post_repository.get_comments(data.post_id, page.cursor, page.limit)
