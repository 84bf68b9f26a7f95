"""
API Middleware

Components:
===========
- error_handler: Global exception handling in the response envelope

Usage:
======
    from agora.api.middleware import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from agora.api.middleware.error_handler import (
    envelope_json,
    format_request_errors,
    setup_exception_handlers,
)

__all__ = [
    "envelope_json",
    "format_request_errors",
    "setup_exception_handlers",
]
