"""
Response Envelope & Error Normalization

Every entry point of the action layer answers with one of two shapes:

    Success: {"success": true,  "data": ...}
    Failure: {"success": false, "error": "...", "code": "...", "statusCode": 400, "details": {...}}

handle_error() is the single place where arbitrary exceptions are turned
into the failure shape. Nothing escapes it: application errors keep their
message and code, pydantic validation errors become VALIDATION_ERROR with
field-level messages, anything else becomes a generic 500 whose internals
are only written to the log.

Error Code Mapping:
===================
    AgoraException subclass      → its own code / status
    pydantic.ValidationError     → VALIDATION_ERROR (400)
    any other Exception          → INTERNAL_SERVER_ERROR (500)
    anything that is not an Exception → UNKNOWN_ERROR (500)

Logging Severity:
=================
    status < 500  → logger.warning
    status >= 500 → logger.error (with exc_info for unexpected exceptions)

Usage:
======
    from agora.shared.core.responses import handle_error, success_response

    try:
        post = await use_case.execute(...)
        return success_response(post)
    except Exception as exc:
        return handle_error(exc)
"""

from typing import Any, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from agora.shared.core.exceptions import AgoraException, InternalServerError, ValidationError
from agora.shared.core.logging import get_logger


logger = get_logger("agora.errors")

T = TypeVar("T")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred. Please try again later."

# pydantic prefixes messages raised from custom validators
_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


# ═══════════════════════════════════════════════════════════════════════════════
# ENVELOPE MODELS
# ═══════════════════════════════════════════════════════════════════════════════


class SuccessResponse(BaseModel, Generic[T]):
    """
    Successful action result.

    Example:
        {"success": true, "data": {"liked": true, "likeCount": 3}}
    """

    success: Literal[True] = True
    data: T

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys throughout."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorResponse(BaseModel):
    """
    Failed action result.

    Example:
        {
            "success": false,
            "error": "Post cannot be empty",
            "code": "VALIDATION_ERROR",
            "statusCode": 400,
            "details": {"errors": {"content": ["Post cannot be empty"]}}
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[False] = False
    error: str
    code: Optional[str] = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    details: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; absent details are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ActionResponse = Union[SuccessResponse[T], ErrorResponse]


def success_response(data: T) -> SuccessResponse[T]:
    """
    Wrap a use-case result in the success envelope.

    Args:
        data: Anything JSON-serializable by pydantic

    Returns:
        SuccessResponse with success=True
    """
    return SuccessResponse[Any](data=data)


# ═══════════════════════════════════════════════════════════════════════════════
# PYDANTIC ERROR FORMATTING
# ═══════════════════════════════════════════════════════════════════════════════


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """
    Group pydantic error messages by dotted field path.

    Example:
        {"content": ["Post cannot be empty"], "image": ["Invalid image URL"]}
    """
    formatted: dict[str, list[str]] = {}
    for item in exc.errors():
        path = ".".join(str(part) for part in item.get("loc", ())) or "_root"
        message = item.get("msg", "Invalid value")
        for prefix in _PYDANTIC_PREFIXES:
            if message.startswith(prefix):
                message = message[len(prefix):]
        formatted.setdefault(path, []).append(message)
    return formatted


def validation_error_from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Convert a pydantic error into our ValidationError, first message on top."""
    errors = format_pydantic_errors(exc)
    first = next((messages[0] for messages in errors.values() if messages), "Validation failed")
    return ValidationError(first, errors=errors)


# ═══════════════════════════════════════════════════════════════════════════════
# NORMALIZER
# ═══════════════════════════════════════════════════════════════════════════════


def error_response_from_exception(exc: AgoraException) -> ErrorResponse:
    """Build the failure envelope from an application exception."""
    return ErrorResponse(
        error=exc.message,
        code=exc.error_code,
        status_code=exc.status_code,
        details=exc.details or None,
    )


def handle_error(error: object) -> ErrorResponse:
    """
    Normalize any raised object into an ErrorResponse.

    Args:
        error: Whatever was caught, usually an Exception

    Returns:
        ErrorResponse; never raises
    """
    if isinstance(error, PydanticValidationError):
        error = validation_error_from_pydantic(error)

    if isinstance(error, AgoraException):
        if error.status_code >= 500:
            logger.error(
                "Application error",
                error_type=type(error).__name__,
                error=error.message,
                code=error.error_code,
                status_code=error.status_code,
                details=error.details,
            )
        else:
            logger.warning(
                "Request rejected",
                error_type=type(error).__name__,
                error=error.message,
                code=error.error_code,
            )
        return error_response_from_exception(error)

    if isinstance(error, Exception):
        logger.error(
            "Unexpected error",
            error_type=type(error).__name__,
            error=str(error),
            exc_info=error,
        )
        return error_response_from_exception(InternalServerError(UNEXPECTED_ERROR_MESSAGE))

    logger.error("Unknown error", error=repr(error))
    return ErrorResponse(
        error=UNKNOWN_ERROR_MESSAGE,
        code="UNKNOWN_ERROR",
        status_code=500,
    )
