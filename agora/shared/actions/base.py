"""
Action Layer Base

Actions are the outermost application entry points. An action never
raises: every call answers with the response envelope.

    { "success": true,  "data": ... }
    { "success": false, "error": "...", "code": "...", "statusCode": 400, "details": {...} }

Action Pipeline:
================
    ┌──────────────┐   ┌──────────────┐   ┌──────────────┐   ┌──────────────┐
    │   Identity   │ → │  Rate limit  │ → │   Use case   │ → │  Revalidate  │
    │ (writes only)│   │ user id / ip │   │              │   │  path tags   │
    └──────────────┘   └──────────────┘   └──────────────┘   └──────────────┘
            │                  │                  │
            └──────────────────┴──────────────────┴──→ handle_error() → ErrorResponse

Usage:
======
    class PostActions(BaseActions):

        @action
        async def toggle_like(self, ctx: ActionContext, post_id: str) -> LikeResult:
            identity = ctx.require_identity()
            self.enforce("toggleLike", user_key("toggleLike", identity.id))
            result = await self.use_cases.toggle_like.execute(post_id, identity.id)
            await self.revalidate("/")
            return result
"""

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, TypeVar

from agora.config.settings import settings
from agora.shared.adapters.cache_invalidator import CacheInvalidator
from agora.shared.core.exceptions import UnauthorizedError
from agora.shared.core.logging import action_logger
from agora.shared.core.responses import ActionResponse, handle_error, success_response
from agora.shared.schemas.auth import Identity
from agora.shared.utils.rate_limiter import RATE_LIMITS, RateLimiter

if TYPE_CHECKING:
    from agora.shared.composition import UseCases


T = TypeVar("T")

UNKNOWN_IP = "unknown"


@dataclass(frozen=True)
class ActionContext:
    """
    Per-call caller information.

    Attributes:
        identity: Signed-in user, or None for anonymous callers
        ip: Client address, used to key limits of anonymous actions
    """

    identity: Optional[Identity] = None
    ip: str = UNKNOWN_IP

    @property
    def user_id(self) -> Optional[str]:
        return self.identity.id if self.identity else None

    def require_identity(self) -> Identity:
        """
        Raises:
            UnauthorizedError: Anonymous caller
        """
        if self.identity is None:
            raise UnauthorizedError()
        return self.identity


def action(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[ActionResponse]]:
    """
    Wrap an action method so that it returns the envelope.

    The decorated coroutine returns plain data; the wrapper turns it into
    SuccessResponse and any exception into ErrorResponse via handle_error().
    """

    @functools.wraps(func)
    async def wrapper(self: "BaseActions", *args: Any, **kwargs: Any) -> ActionResponse:
        try:
            data = await func(self, *args, **kwargs)
        except Exception as exc:
            return handle_error(exc)
        action_logger.debug("Action completed", action=func.__name__)
        return success_response(data)

    return wrapper


class BaseActions:
    """
    Shared collaborators of every action group.

    Args:
        use_cases: Use cases bound to the current session
        rate_limiter: Process-wide limiter
        cache_invalidator: Receives path tags after successful writes
        rate_limit_enabled: Overrides RATE_LIMIT_ENABLED when given
    """

    def __init__(
        self,
        use_cases: "UseCases",
        rate_limiter: RateLimiter,
        cache_invalidator: CacheInvalidator,
        rate_limit_enabled: Optional[bool] = None,
    ) -> None:
        self.use_cases = use_cases
        self.rate_limiter = rate_limiter
        self.cache_invalidator = cache_invalidator
        self.rate_limit_enabled = (
            settings.RATE_LIMIT_ENABLED if rate_limit_enabled is None else rate_limit_enabled
        )

    def enforce(self, policy_name: str, identifier: str) -> None:
        """
        Count one request against ``RATE_LIMITS[policy_name]``.

        Raises:
            RateLimitExceeded: Policy exhausted for ``identifier``
        """
        if not self.rate_limit_enabled:
            return
        self.rate_limiter.check(identifier, RATE_LIMITS[policy_name])

    async def revalidate(self, *tags: Optional[str]) -> None:
        """Send each non-empty tag to the cache invalidator."""
        for tag in tags:
            if tag:
                await self.cache_invalidator.revalidate(tag)


def profile_path(username: Optional[str]) -> Optional[str]:
    """Cache tag of a profile page, or None for users without a handle."""
    return f"/profile/{username}" if username else None
