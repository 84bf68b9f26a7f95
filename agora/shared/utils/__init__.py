"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- pagination: Cursor pagination (paginate, apply_cursor)
- rate_limiter: In-memory fixed-window rate limiter and policy table
- security: Password hashing and JWT management

Usage:
======
    from agora.shared.utils.security import SecurityUtils
    from agora.shared.utils.pagination import paginate, PaginatedResult
    from agora.shared.utils.rate_limiter import RateLimiter, RATE_LIMITS
"""

from agora.shared.utils.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResult,
    PaginationParams,
    apply_cursor,
    paginate,
)
from agora.shared.utils.rate_limiter import (
    RATE_LIMITS,
    RateLimiter,
    RateLimitPolicy,
    RateLimitResult,
    ip_key,
    user_key,
)
from agora.shared.utils.security import SecurityUtils

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PaginatedResult",
    "PaginationParams",
    "apply_cursor",
    "paginate",
    "RATE_LIMITS",
    "RateLimiter",
    "RateLimitPolicy",
    "RateLimitResult",
    "ip_key",
    "user_key",
    "SecurityUtils",
]
