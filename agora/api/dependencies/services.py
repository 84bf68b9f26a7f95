"""
Service Dependencies

Process-wide collaborators live on ``app.state`` (created by
create_application()). Actions are built per request around the
request's database session.

    app.state.rate_limiter       RateLimiter
    app.state.cache_invalidator  CacheInvalidator

Usage:
======
    from agora.api.dependencies.services import AppActions, Context

    @router.post("/posts")
    async def create_post(body: CreatePostRequest, actions: AppActions, ctx: Context):
        return await actions.posts.create_post(ctx, body.content, body.image)
"""

from typing import Annotated

from fastapi import Depends, Request

from agora.api.dependencies.auth import OptionalIdentity
from agora.api.dependencies.database import DbSession
from agora.shared.actions import ActionContext
from agora.shared.actions.base import UNKNOWN_IP
from agora.shared.adapters.cache_invalidator import CacheInvalidator
from agora.shared.composition import Actions, build_actions
from agora.shared.utils.rate_limiter import RateLimiter


def get_rate_limiter(request: Request) -> RateLimiter:
    """The application's RateLimiter."""
    return request.app.state.rate_limiter


def get_cache_invalidator(request: Request) -> CacheInvalidator:
    """The application's CacheInvalidator."""
    return request.app.state.cache_invalidator


def get_client_ip(request: Request) -> str:
    """
    Client address.

    The first X-Forwarded-For hop wins when the API runs behind a proxy.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IP


async def get_action_context(request: Request, identity: OptionalIdentity) -> ActionContext:
    """Caller identity plus client IP."""
    return ActionContext(identity=identity, ip=get_client_ip(request))


async def get_actions(
    db: DbSession,
    rate_limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    cache_invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> Actions:
    """
    Action groups bound to the request's session.

    Creates new instances per request; the limiter and invalidator are shared.
    """
    return build_actions(db, rate_limiter, cache_invalidator)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

AppActions = Annotated[Actions, Depends(get_actions)]
Context = Annotated[ActionContext, Depends(get_action_context)]
