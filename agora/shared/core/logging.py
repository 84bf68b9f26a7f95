"""
Logging Configuration

Structured logging setup using structlog for consistent, parseable logs.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Post created                   post_id=550e8400-e29b-...

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "info", "event": "Post created", "post_id": "550e8400-..."}

Features:
=========
- Structured key-value logging
- Context variables (add info to all subsequent logs)
- Redaction of sensitive fields (passwords, tokens, secrets) before rendering
- Colored console output in development
- JSON output in production

Usage:
======
    from agora.shared.core.logging import logger, get_logger, log_context

    # Basic logging
    logger.info("Post created", post_id=post.id, author_id=user_id)
    logger.error("Database error", error=str(e))

    # Get named logger
    db_logger = get_logger("database")
    db_logger.debug("Query executed", sql=sql)

    # Add context to all subsequent logs
    log_context(request_id=request_id, user_id=user_id)
    logger.info("Processing request")  # Includes request_id and user_id
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from agora.config.settings import settings


# Field names that never reach a log sink, compared after normalize_field_name()
REDACTED_FIELDS = frozenset(
    {
        "password",
        "passwordhash",
        "newpassword",
        "currentpassword",
        "token",
        "accesstoken",
        "refreshtoken",
        "secret",
        "secretkey",
        "apikey",
        "authorization",
        "cookie",
    }
)


def normalize_field_name(key: str) -> str:
    """
    Fold snake_case, camelCase and kebab-case spellings together.

    Example:
        normalize_field_name("newPassword")   # "newpassword"
        normalize_field_name("secret_key")    # "secretkey"
    """
    return key.replace("_", "").replace("-", "").lower()


def is_redacted_field(key: Any) -> bool:
    """Whether a log key names a credential."""
    return isinstance(key, str) and normalize_field_name(key) in REDACTED_FIELDS


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _scrub(item)
            for key, item in value.items()
            if not is_redacted_field(key)
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_scrub(item) for item in value)
    return value


def redact_sensitive_fields(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    structlog processor that removes denylisted keys at any nesting depth.

    The whole key is dropped rather than masked so that neither the value
    nor its length leaks.
    """
    return _scrub(event_dict)


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    Sets up structlog with:
    - Development: Colored console output for readability
    - Production: JSON output for log aggregation systems

    Called automatically when this module is imported.
    """
    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    # Shared processors for all environments
    shared_processors: list[Processor] = [
        # Merge context variables from contextvars
        structlog.contextvars.merge_contextvars,
        # Add log level (info, warning, error, etc.)
        structlog.stdlib.add_log_level,
        # Add logger name for filtering
        structlog.stdlib.add_logger_name,
        # Format positional arguments
        structlog.stdlib.PositionalArgumentsFormatter(),
        # Add ISO timestamp
        structlog.processors.TimeStamper(fmt="iso"),
        # Add stack info for exceptions
        structlog.processors.StackInfoRenderer(),
        # Decode bytes to strings
        structlog.processors.UnicodeDecoder(),
        # Drop passwords, tokens and friends
        redact_sensitive_fields,
    ]

    if settings.is_development:
        # Development: colored console output for readability
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        # Production: JSON output for log aggregation
        processors = shared_processors + [
            # Format exception info
            structlog.processors.format_exc_info,
            # Output as JSON
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, defaults to module name if not specified

    Returns:
        Configured structlog logger

    Example:
        db_logger = get_logger("database")
        db_logger.info("Connected to database", host=host, port=port)
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Context is stored in context variables and automatically included
    in all log messages until cleared or the request ends.

    Args:
        **kwargs: Key-value pairs to add to log context
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """
    Clear all context variables.

    Call this at the end of request processing to prevent
    context from leaking to other requests.
    """
    structlog.contextvars.clear_contextvars()


# Initialize logging on module import
setup_logging()

# Default logger instance for convenient import
logger = get_logger("agora")

# Per-layer loggers
db_logger = get_logger("agora.database")
auth_logger = get_logger("agora.auth")
use_case_logger = get_logger("agora.use_case")
action_logger = get_logger("agora.action")
