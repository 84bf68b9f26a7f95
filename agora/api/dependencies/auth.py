"""
Authentication Dependencies

Resolves the optional bearer token into an Identity.

Dependency Hierarchy:
=====================
    get_bearer_token()        ← Raw token from the Authorization header, or None
           │
           ▼
    get_optional_identity()   ← Identity, or None for anonymous callers

Reads run anonymously when no token is sent. Whether an operation needs a
signed-in user is decided by the action layer, so a missing token on a
write surfaces as the UNAUTHORIZED envelope rather than a framework 403.

A token that is sent but invalid or expired is rejected with 401 on every
route.

Type Aliases:
=============
    OptionalIdentity - Identity | None

Usage:
======
    from agora.api.dependencies.auth import OptionalIdentity

    @router.get("/me")
    async def me(identity: OptionalIdentity):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agora.api.dependencies.database import DbSession
from agora.shared.repositories import SqlAlchemyUserRepository
from agora.shared.schemas.auth import Identity
from agora.shared.use_cases import ResolveIdentityUseCase


# Security scheme for Bearer tokens; a missing header is not an error here
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[str]:
    """
    Extract the bearer token from the Authorization header.

    Returns:
        The token string, or None when no bearer credentials were sent
    """
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_optional_identity(
    db: DbSession,
    token: Annotated[Optional[str], Depends(get_bearer_token)],
) -> Optional[Identity]:
    """
    Resolve the caller.

    Returns:
        Identity of the token's user, or None without a token

    Raises:
        UnauthorizedError: Invalid or expired token, or deleted user
    """
    if token is None:
        return None
    return await ResolveIdentityUseCase(SqlAlchemyUserRepository(db)).execute(token)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

OptionalIdentity = Annotated[Optional[Identity], Depends(get_optional_identity)]
