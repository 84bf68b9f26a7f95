"""
Post Actions

Entry points for posts, likes and comments.

Actions:
========
    create_post        auth, createPost limit, revalidates "/" and the author's profile
    get_feed           anonymous allowed; has_liked reflects the caller
    get_post           anonymous allowed
    delete_post        auth, deletePost limit, author only
    toggle_like        auth, toggleLike limit
    create_comment     auth, createComment limit
    get_comments       anonymous allowed
    get_user_posts     anonymous allowed
    get_liked_posts    anonymous allowed

Usage:
======
    actions = PostActions(use_cases, rate_limiter, cache_invalidator)
    response = await actions.create_post(ctx, content="hello")
    response.to_dict()  # {"success": True, "data": {...}}
"""

from typing import Optional

from agora.shared.actions.base import ActionContext, BaseActions, action, profile_path
from agora.shared.schemas.post import CommentWithAuthor, DeletedPost, LikeResult, PostWithDetails
from agora.shared.utils.pagination import PaginatedResult
from agora.shared.utils.rate_limiter import user_key


class PostActions(BaseActions):
    """Post, like and comment actions."""

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    @action
    async def create_post(
        self,
        ctx: ActionContext,
        content: str,
        image: Optional[str] = None,
    ) -> PostWithDetails:
        """Publish a post as the signed-in user."""
        identity = ctx.require_identity()
        self.enforce("createPost", user_key("createPost", identity.id))

        post = await self.use_cases.create_post.execute(
            author_id=identity.id,
            content=content,
            image=image,
        )
        await self.revalidate("/", profile_path(identity.username))
        return post

    @action
    async def delete_post(self, ctx: ActionContext, post_id: str) -> DeletedPost:
        """Delete one of the caller's own posts."""
        identity = ctx.require_identity()
        self.enforce("deletePost", user_key("deletePost", identity.id))

        deleted = await self.use_cases.delete_post.execute(post_id=post_id, user_id=identity.id)
        await self.revalidate("/", profile_path(identity.username))
        return deleted

    @action
    async def toggle_like(self, ctx: ActionContext, post_id: str) -> LikeResult:
        """Like or unlike a post."""
        identity = ctx.require_identity()
        self.enforce("toggleLike", user_key("toggleLike", identity.id))

        result = await self.use_cases.toggle_like.execute(post_id=post_id, user_id=identity.id)
        await self.revalidate("/")
        return result

    @action
    async def create_comment(
        self,
        ctx: ActionContext,
        post_id: str,
        content: str,
    ) -> CommentWithAuthor:
        """Comment on a post."""
        identity = ctx.require_identity()
        self.enforce("createComment", user_key("createComment", identity.id))

        comment = await self.use_cases.create_comment.execute(
            post_id=post_id,
            content=content,
            author_id=identity.id,
        )
        await self.revalidate("/")
        return comment

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    @action
    async def get_feed(
        self,
        ctx: ActionContext,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResult[PostWithDetails]:
        return await self.use_cases.get_feed.execute(
            cursor=cursor,
            limit=limit,
            current_user_id=ctx.user_id,
        )

    @action
    async def get_post(self, ctx: ActionContext, post_id: str) -> PostWithDetails:
        return await self.use_cases.get_post.execute(post_id, current_user_id=ctx.user_id)

    @action
    async def get_comments(
        self,
        ctx: ActionContext,
        post_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResult[CommentWithAuthor]:
        return await self.use_cases.get_comments.execute(post_id, cursor=cursor, limit=limit)

    @action
    async def get_user_posts(
        self,
        ctx: ActionContext,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResult[PostWithDetails]:
        return await self.use_cases.get_user_posts.execute(
            user_id,
            cursor=cursor,
            limit=limit,
            current_user_id=ctx.user_id,
        )

    @action
    async def get_liked_posts(
        self,
        ctx: ActionContext,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResult[PostWithDetails]:
        return await self.use_cases.get_user_liked_posts.execute(
            user_id,
            cursor=cursor,
            limit=limit,
            current_user_id=ctx.user_id,
        )
