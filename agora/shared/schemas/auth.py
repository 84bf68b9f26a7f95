"""
Auth Schemas

The caller identity handed to actions, and the sign-in / sign-up result.
"""

from typing import Optional

from agora.shared.schemas.common import BaseSchema
from agora.shared.schemas.user import UserPublic


class Identity(BaseSchema):
    """
    Who is calling.

    Resolved from the bearer token by the API layer; None means anonymous.
    """

    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    username: Optional[str] = None


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserPublic
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
