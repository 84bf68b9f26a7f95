"""
Post Handler

Feed, posts, likes and comments.

Endpoints:
==========
    GET    /posts                       Feed page (?cursor=&limit=)
    POST   /posts                       Create a post
    GET    /posts/{post_id}             One post
    DELETE /posts/{post_id}             Delete own post
    POST   /posts/{post_id}/like        Toggle like
    GET    /posts/{post_id}/comments    Comment page, oldest first
    POST   /posts/{post_id}/comments    Add a comment
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from agora.api.dependencies import AppActions, Context
from agora.api.responses import render
from agora.shared.schemas.common import BaseSchema


router = APIRouter()


class CreatePostRequest(BaseSchema):
    content: str
    image: Optional[str] = None


class CreateCommentRequest(BaseSchema):
    content: str


@router.get("")
async def get_feed(
    actions: AppActions,
    ctx: Context,
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
):
    """Global feed, newest first; hasLiked reflects the caller."""
    return render(await actions.posts.get_feed(ctx, cursor=cursor, limit=limit))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(body: CreatePostRequest, actions: AppActions, ctx: Context):
    """Publish a post; 401 when anonymous, 429 past 10 posts per hour."""
    response = await actions.posts.create_post(ctx, content=body.content, image=body.image)
    return render(response, status.HTTP_201_CREATED)


@router.get("/{post_id}")
async def get_post(post_id: str, actions: AppActions, ctx: Context):
    return render(await actions.posts.get_post(ctx, post_id))


@router.delete("/{post_id}")
async def delete_post(post_id: str, actions: AppActions, ctx: Context):
    """Delete a post; 403 unless the caller wrote it."""
    return render(await actions.posts.delete_post(ctx, post_id))


@router.post("/{post_id}/like")
async def toggle_like(post_id: str, actions: AppActions, ctx: Context):
    """Like or unlike; returns {liked, likeCount}."""
    return render(await actions.posts.toggle_like(ctx, post_id))


@router.get("/{post_id}/comments")
async def get_comments(
    post_id: str,
    actions: AppActions,
    ctx: Context,
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
):
    return render(await actions.posts.get_comments(ctx, post_id, cursor=cursor, limit=limit))


@router.post("/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: str,
    body: CreateCommentRequest,
    actions: AppActions,
    ctx: Context,
):
    response = await actions.posts.create_comment(ctx, post_id=post_id, content=body.content)
    return render(response, status.HTTP_201_CREATED)
