"""
User Handler

Profiles, follows and suggestions.

Endpoints:
==========
    GET    /users/suggestions           Who to follow (auth)
    PATCH  /users/me                    Update own profile (auth)
    POST   /users/me/username           Assign a handle if missing (auth)
    GET    /users/{username}            Profile by handle
    POST   /users/{user_id}/follow      Toggle follow (auth)
    GET    /users/{user_id}/posts       Posts by user
    GET    /users/{user_id}/likes       Posts liked by user
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Query

from agora.api.dependencies import AppActions, Context
from agora.api.responses import render
from agora.shared.use_cases.users import DEFAULT_SUGGESTION_COUNT


router = APIRouter()


@router.get("/suggestions")
async def get_suggestions(
    actions: AppActions,
    ctx: Context,
    limit: int = Query(DEFAULT_SUGGESTION_COUNT),
):
    return render(await actions.users.get_suggestions(ctx, limit=limit))


@router.patch("/me")
async def update_profile(
    actions: AppActions,
    ctx: Context,
    data: dict[str, Any] = Body(...),
):
    """
    Partial update; only the keys present in the body change.

    Accepted keys: name, bio, location, website, image. An empty string
    clears bio, location, website or image.
    """
    return render(await actions.users.update_profile(ctx, data))


@router.post("/me/username")
async def ensure_username(actions: AppActions, ctx: Context):
    return render(await actions.users.ensure_username(ctx))


@router.get("/{username}")
async def get_profile(username: str, actions: AppActions, ctx: Context):
    """Profile with counts; isFollowing is set for signed-in viewers."""
    return render(await actions.users.get_profile(ctx, username))


@router.post("/{user_id}/follow")
async def toggle_follow(user_id: str, actions: AppActions, ctx: Context):
    """Follow or unfollow; returns {following, followerCount}."""
    return render(await actions.users.toggle_follow(ctx, user_id))


@router.get("/{user_id}/posts")
async def get_user_posts(
    user_id: str,
    actions: AppActions,
    ctx: Context,
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
):
    return render(await actions.posts.get_user_posts(ctx, user_id, cursor=cursor, limit=limit))


@router.get("/{user_id}/likes")
async def get_liked_posts(
    user_id: str,
    actions: AppActions,
    ctx: Context,
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
):
    return render(await actions.posts.get_liked_posts(ctx, user_id, cursor=cursor, limit=limit))
