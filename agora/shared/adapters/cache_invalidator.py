"""
Cache Invalidation Adapter

After a successful write the action layer announces which page became
stale ("/", "/profile/jane", "/notifications"). Whatever renders those
pages (an edge cache, a server-rendering frontend) listens and refreshes.

Backends:
=========
- LoggingCacheInvalidator: logs the tag; default, and what tests use
- RedisCacheInvalidator: PUBLISH on a Redis channel (redis.asyncio)

Invalidation is fire-and-forget: a Redis failure is logged at warning
level and never turns a successful write into an error.

Usage:
======
    from agora.shared.adapters.cache_invalidator import build_cache_invalidator

    invalidator = build_cache_invalidator()
    await invalidator.revalidate("/")
    await invalidator.close()
"""

from typing import Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from agora.config.settings import settings
from agora.shared.core.logging import get_logger


logger = get_logger("agora.cache")


class CacheInvalidator(Protocol):
    """Receives a path tag after every successful write."""

    async def revalidate(self, tag: str) -> None:
        ...

    async def close(self) -> None:
        ...


class LoggingCacheInvalidator:
    """
    Invalidator that only logs.

    Keeps the tags it has seen in ``revalidated`` so tests can assert on them.
    """

    def __init__(self) -> None:
        self.revalidated: list[str] = []

    async def revalidate(self, tag: str) -> None:
        self.revalidated.append(tag)
        logger.debug("Cache revalidation requested", tag=tag)

    async def close(self) -> None:
        return None


class RedisCacheInvalidator:
    """
    Invalidator that publishes tags on a Redis pub/sub channel.

    Args:
        url: Redis URL (redis://host:port/db), default REDIS_URL
        channel: Channel name, default CACHE_INVALIDATION_CHANNEL
    """

    def __init__(self, url: Optional[str] = None, channel: Optional[str] = None) -> None:
        self.url = url or settings.REDIS_URL
        self.channel = channel or settings.CACHE_INVALIDATION_CHANNEL
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    async def revalidate(self, tag: str) -> None:
        """
        Publish ``tag``.

        Failures are logged and swallowed; the write that triggered the
        invalidation has already been committed.
        """
        try:
            await self.client.publish(self.channel, tag)
        except RedisError as e:
            logger.warning("Cache revalidation publish failed", tag=tag, error=str(e))

    async def close(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_cache_invalidator() -> CacheInvalidator:
    """Invalidator selected by CACHE_INVALIDATION_BACKEND."""
    if settings.CACHE_INVALIDATION_BACKEND == "redis":
        return RedisCacheInvalidator()
    return LoggingCacheInvalidator()
