"""
Error Handler Middleware

Global exception handling for the API.

Everything that escapes a handler or a dependency is rendered in the same
failure envelope the action layer returns:

    {
        "success": false,
        "error": "Post with id 'abc-123' not found",
        "code": "NOT_FOUND",
        "statusCode": 404,
        "details": {"resource": "Post", "id": "abc-123"}
    }

Exception Handling:
===================
1. AgoraException subclasses   → their status_code and code
2. RequestValidationError       → 400 VALIDATION_ERROR with field messages
3. Starlette HTTPException      → its status code (unknown routes, bad methods)
4. Other exceptions             → 500 with generic message (details hidden)

Usage:
======
    from agora.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Iterable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agora.shared.core.exceptions import AgoraException, ValidationError
from agora.shared.core.logging import logger
from agora.shared.core.responses import ErrorResponse, handle_error


# Location prefixes FastAPI adds in front of the field name
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}

_HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def envelope_json(response: ErrorResponse) -> JSONResponse:
    """JSONResponse carrying ``response`` with its own status code."""
    return JSONResponse(status_code=response.status_code or 500, content=response.to_dict())


def format_request_errors(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """
    Group FastAPI request errors by field.

    Example:
        [{"loc": ("body", "content"), "msg": "Field required"}]
        → {"content": ["Field required"]}
    """
    formatted: dict[str, list[str]] = {}
    for item in errors:
        loc = [str(part) for part in item.get("loc", ())]
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        field = ".".join(loc) or "_root"
        formatted.setdefault(field, []).append(item.get("msg", "Invalid value"))
    return formatted


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(AgoraException)
    async def agora_exception_handler(
        request: Request,
        exc: AgoraException,
    ) -> JSONResponse:
        """
        Handle Agora-specific exceptions raised outside the action layer,
        e.g. an invalid bearer token in a dependency.
        """
        return envelope_json(handle_error(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle malformed request bodies and parameters.

        These occur when the request doesn't match the declared shape,
        before any action runs.
        """
        errors = format_request_errors(exc.errors())
        logger.warning("Request validation error", fields=sorted(errors), path=request.url.path)
        first = next(iter(errors.values()))[0] if errors else "Request validation failed"
        return envelope_json(handle_error(ValidationError(first, errors=errors)))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render framework HTTP errors (unknown route, wrong method) in the envelope."""
        response = ErrorResponse(
            error=str(exc.detail),
            code=_HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=response.to_dict(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        handle_error() logs the exception once, tagged with the request path;
        the client only sees the generic message.
        """
        with structlog.contextvars.bound_contextvars(path=request.url.path):
            return envelope_json(handle_error(exc))
