"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions
- Response envelopes and error normalization

Usage:
======
    from agora.shared.core.logging import logger, get_logger
    from agora.shared.core.exceptions import AgoraException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from agora.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from agora.shared.core.exceptions import (
    AgoraException,
    ValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    PostNotFoundError,
    UserNotFoundError,
    NotificationNotFoundError,
    ConflictError,
    RateLimitExceeded,
    InternalServerError,
)
from agora.shared.core.responses import (
    SuccessResponse,
    ErrorResponse,
    ActionResponse,
    success_response,
    handle_error,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "AgoraException",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "PostNotFoundError",
    "UserNotFoundError",
    "NotificationNotFoundError",
    "ConflictError",
    "RateLimitExceeded",
    "InternalServerError",
    # Responses
    "SuccessResponse",
    "ErrorResponse",
    "ActionResponse",
    "success_response",
    "handle_error",
]
