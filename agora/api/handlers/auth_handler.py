"""
Authentication Handler

Credentials sign-up / sign-in and the current identity.

ARCHITECTURE:
=============
    Handler → Action → Use case → Repository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call an action
- Map the envelope to an HTTP status
"""

from typing import Optional

from fastapi import APIRouter, status

from agora.api.dependencies import AppActions, Context
from agora.api.responses import render
from agora.shared.core.exceptions import UnauthorizedError
from agora.shared.core.responses import handle_error, success_response
from agora.shared.schemas.common import BaseSchema


router = APIRouter()


class SignUpRequest(BaseSchema):
    """Sign-up body; rules are enforced by SignUpUseCase."""

    email: str
    password: str
    name: str
    username: Optional[str] = None


class SignInRequest(BaseSchema):
    email: str
    password: str


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(body: SignUpRequest, actions: AppActions, ctx: Context):
    """
    Register a new account.

    Returns:
        201 with {user, accessToken, tokenType, expiresIn}

    Errors:
        400: Invalid input
        409: Email already in use
        429: Too many sign-up attempts from this IP
    """
    response = await actions.auth.sign_up(
        ctx,
        email=body.email,
        password=body.password,
        name=body.name,
        username=body.username,
    )
    return render(response, status.HTTP_201_CREATED)


@router.post("/sign-in")
async def sign_in(body: SignInRequest, actions: AppActions, ctx: Context):
    """
    Exchange credentials for an access token.

    Errors:
        401: Invalid email or password
        429: Too many login attempts from this IP
    """
    response = await actions.auth.sign_in(ctx, email=body.email, password=body.password)
    return render(response)


@router.get("/me")
async def me(ctx: Context):
    """The identity behind the bearer token; 401 when anonymous."""
    if ctx.identity is None:
        return render(handle_error(UnauthorizedError()))
    return render(success_response(ctx.identity))
