"""
Envelope → HTTP

Handlers return the action envelope as the JSON body and use its
``statusCode`` as the HTTP status.

    SuccessResponse  → success_status (200 unless the handler says 201)
    ErrorResponse    → response.status_code
"""

from fastapi import status
from fastapi.responses import JSONResponse

from agora.shared.core.responses import ActionResponse, ErrorResponse


def render(response: ActionResponse, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Args:
        response: Envelope from an action
        success_status: HTTP status for a successful envelope

    Returns:
        JSONResponse with the envelope as body
    """
    if isinstance(response, ErrorResponse):
        return JSONResponse(
            status_code=response.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.to_dict(),
        )
    return JSONResponse(status_code=success_status, content=response.to_dict())
