"""
Adapters Package

External service integrations.

Contents:
=========
- cache_invalidator: Presentation-layer cache invalidation (log or Redis pub/sub)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from agora.shared.adapters.cache_invalidator import build_cache_invalidator
"""

from agora.shared.adapters.cache_invalidator import (
    CacheInvalidator,
    LoggingCacheInvalidator,
    RedisCacheInvalidator,
    build_cache_invalidator,
)

__all__ = [
    "CacheInvalidator",
    "LoggingCacheInvalidator",
    "RedisCacheInvalidator",
    "build_cache_invalidator",
]
