"""
Notification Handler

The caller's inbox. Every endpoint requires a bearer token.

Endpoints:
==========
    GET    /notifications                   Inbox page (?cursor=&limit=&unreadOnly=)
    GET    /notifications/unread-count      Badge count
    POST   /notifications/read-all          Mark everything read
    POST   /notifications/{id}/read         Mark one read
"""

from typing import Optional

from fastapi import APIRouter, Query

from agora.api.dependencies import AppActions, Context
from agora.api.responses import render


router = APIRouter()


@router.get("")
async def get_notifications(
    actions: AppActions,
    ctx: Context,
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    unread_only: bool = Query(False, alias="unreadOnly"),
):
    response = await actions.notifications.get_notifications(
        ctx,
        cursor=cursor,
        limit=limit,
        unread_only=unread_only,
    )
    return render(response)


@router.get("/unread-count")
async def get_unread_count(actions: AppActions, ctx: Context):
    return render(await actions.notifications.get_unread_count(ctx))


@router.post("/read-all")
async def mark_all_as_read(actions: AppActions, ctx: Context):
    return render(await actions.notifications.mark_all_as_read(ctx))


@router.post("/{notification_id}/read")
async def mark_as_read(notification_id: str, actions: AppActions, ctx: Context):
    """403 when the notification belongs to another user."""
    return render(await actions.notifications.mark_as_read(ctx, notification_id))
