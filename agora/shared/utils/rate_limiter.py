"""
In-Memory Rate Limiter

Fixed-window counters keyed by identifier, held in process memory.

How It Works:
=============
Each key owns an entry {count, reset_at}. The window is anchored to the
first request seen for the key and is discarded entirely once it expires.

    t=0     limit("user:1:createPost", 3, 60)  → success, remaining=2, window ends t=60
    t=10    limit(...)                         → success, remaining=1
    t=20    limit(...)                         → success, remaining=0
    t=30    limit(...)                         → rejected, remaining=0, reset_at=60
    t=61    limit(...)                         → fresh window, remaining=2

Concurrency:
============
The read-compare-increment sequence runs under a lock and never awaits,
so two callers racing for the last slot cannot both get it. This holds
for threads as well as for asyncio tasks.

Deployment:
===========
Counters live in one process. Behind several workers each worker counts
on its own, so the effective limit is multiplied by the worker count.
Agora is deployed as a single API process; see DESIGN.md.

Usage:
======
    from agora.shared.utils.rate_limiter import RateLimiter, RATE_LIMITS, user_key

    limiter = RateLimiter()
    limiter.start()  # periodic sweep of expired entries

    limiter.check(user_key("createPost", user_id), RATE_LIMITS["createPost"])

    await limiter.dispose()
"""

import asyncio
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from agora.shared.core.exceptions import RateLimitExceeded
from agora.shared.core.logging import get_logger


logger = get_logger("agora.rate_limiter")

HOUR = 60 * 60


# ═══════════════════════════════════════════════════════════════════════════════
# DATA CLASSES
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class RateLimitPolicy:
    """A named limit: at most ``max_requests`` per ``window_seconds``."""

    max_requests: int
    window_seconds: float
    message: str


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one limit() call. ``reset_at`` is an epoch timestamp."""

    success: bool
    remaining: int
    reset_at: float


@dataclass(frozen=True)
class RateLimiterStats:
    """Entry counts; active entries have not expired yet."""

    total_entries: int
    active_entries: int


@dataclass
class _Entry:
    count: int
    reset_at: float


# ═══════════════════════════════════════════════════════════════════════════════
# POLICY TABLE
# ═══════════════════════════════════════════════════════════════════════════════

RATE_LIMITS: dict[str, RateLimitPolicy] = {
    # Posts
    "createPost": RateLimitPolicy(
        max_requests=10,
        window_seconds=HOUR,
        message="Too many posts created. Please try again in an hour.",
    ),
    "createComment": RateLimitPolicy(
        max_requests=50,
        window_seconds=HOUR,
        message="Too many comments. Please slow down.",
    ),
    "toggleLike": RateLimitPolicy(
        max_requests=100,
        window_seconds=HOUR,
        message="Too many like actions. Please slow down.",
    ),
    "deletePost": RateLimitPolicy(
        max_requests=20,
        window_seconds=HOUR,
        message="Too many deletions. Please slow down.",
    ),
    # Users
    "toggleFollow": RateLimitPolicy(
        max_requests=20,
        window_seconds=HOUR,
        message="Too many follow actions. Please slow down.",
    ),
    "updateProfile": RateLimitPolicy(
        max_requests=5,
        window_seconds=HOUR,
        message="Too many profile updates. Please try again later.",
    ),
    # Auth (keyed by IP)
    "signIn": RateLimitPolicy(
        max_requests=5,
        window_seconds=15 * 60,
        message="Too many login attempts. Please try again in 15 minutes.",
    ),
    "signUp": RateLimitPolicy(
        max_requests=3,
        window_seconds=HOUR,
        message="Too many sign-up attempts. Please try again later.",
    ),
}


def user_key(action: str, user_id: str) -> str:
    """Key for per-user limits, e.g. ``user:42:createPost``."""
    return f"user:{user_id}:{action}"


def ip_key(action: str, ip: str) -> str:
    """Key for per-IP limits, e.g. ``ip:203.0.113.7:signIn``."""
    return f"ip:{ip}:{action}"


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITER
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimiter:
    """
    In-process fixed-window rate limiter.

    One instance is created by the application and injected into the
    action layer. Tests create their own with a fake clock.

    Args:
        clock: Returns the current time in seconds (default time.time)
        sweep_interval: Seconds between background purges of expired entries

    Example:
        now = [1000.0]
        limiter = RateLimiter(clock=lambda: now[0])
        limiter.limit("k", 5, 60)
        now[0] += 61
        limiter.limit("k", 5, 60).remaining  # 4, window restarted
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        sweep_interval: float = 60.0,
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._sweep_task: Optional[asyncio.Task] = None

    # ═══════════════════════════════════════════════════════════════════════════
    # COUNTING
    # ═══════════════════════════════════════════════════════════════════════════

    def limit(
        self,
        identifier: str,
        max_requests: int,
        window_seconds: float,
    ) -> RateLimitResult:
        """
        Count one request for ``identifier``.

        Args:
            identifier: Key such as ``user:{id}:{action}``
            max_requests: Requests allowed per window
            window_seconds: Window length

        Returns:
            RateLimitResult. On rejection ``remaining`` is 0 and ``reset_at``
            is the end of the current window; the counter is not touched.
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identifier)

            if entry is None or now > entry.reset_at:
                reset_at = now + window_seconds
                self._entries[identifier] = _Entry(count=1, reset_at=reset_at)
                return RateLimitResult(
                    success=True,
                    remaining=max_requests - 1,
                    reset_at=reset_at,
                )

            if entry.count >= max_requests:
                return RateLimitResult(success=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                success=True,
                remaining=max_requests - entry.count,
                reset_at=entry.reset_at,
            )

    def check(self, identifier: str, policy: RateLimitPolicy) -> RateLimitResult:
        """
        Count one request and raise when the policy is exceeded.

        Raises:
            RateLimitExceeded: Message ends with "Try again in N minute(s)."
        """
        result = self.limit(identifier, policy.max_requests, policy.window_seconds)
        if result.success:
            return result

        seconds_left = max(0.0, result.reset_at - self._clock())
        minutes = max(1, math.ceil(seconds_left / 60))
        suffix = "" if minutes == 1 else "s"
        logger.warning("Rate limit exceeded", identifier=identifier, reset_at=result.reset_at)
        raise RateLimitExceeded(
            f"{policy.message} Try again in {minutes} minute{suffix}.",
            reset_at=result.reset_at,
            retry_after=math.ceil(seconds_left),
        )

    def reset(self, identifier: str) -> None:
        """Forget the window for one key."""
        with self._lock:
            self._entries.pop(identifier, None)

    # ═══════════════════════════════════════════════════════════════════════════
    # HOUSEKEEPING
    # ═══════════════════════════════════════════════════════════════════════════

    def sweep(self) -> int:
        """
        Drop entries whose window has ended.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now > entry.reset_at]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def stats(self) -> RateLimiterStats:
        """Total and still-active entry counts."""
        with self._lock:
            now = self._clock()
            active = sum(1 for entry in self._entries.values() if now <= entry.reset_at)
            return RateLimiterStats(total_entries=len(self._entries), active_entries=active)

    def start(self) -> None:
        """
        Launch the periodic sweep on the running event loop.

        Calling start() twice keeps the first task.
        """
        if self._sweep_task is not None and not self._sweep_task.done():
            return
        self._sweep_task = asyncio.get_running_loop().create_task(self._sweep_forever())
        logger.info("Rate limiter sweep started", interval_seconds=self._sweep_interval)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            removed = self.sweep()
            if removed:
                logger.debug("Rate limiter swept expired entries", removed=removed)

    async def dispose(self) -> None:
        """Cancel the sweep task and clear all counters."""
        task, self._sweep_task = self._sweep_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        with self._lock:
            self._entries.clear()
