"""
Security Utilities

Password hashing and JWT access tokens.

Password Hashing:
=================
bcrypt through passlib's CryptContext. Users created through an OAuth
provider have no password hash; verify_password() returns False for them
instead of raising.

JWT Tokens:
===========
PyJWT, HS256 by default. The payload carries ``user_id`` and ``email`` plus
the standard ``exp`` and ``iat`` claims.

Usage:
======
    from agora.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("Sup3rSecret")
    SecurityUtils.verify_password("Sup3rSecret", hashed)  # True

    token = SecurityUtils.create_access_token(user_id=user.id, email=user.email)
    payload = SecurityUtils.decode_access_token(token)
    payload["user_id"]
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext

from agora.config.settings import settings
from agora.shared.core.exceptions import UnauthorizedError


# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT token creation and validation
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify password against bcrypt hash.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored hash, or None for OAuth-only accounts

        Returns:
            True if password matches, False otherwise
        """
        if not hashed_password:
            return False
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        user_id: str,
        email: str,
        expires_delta: Optional[timedelta] = None,
        secret_key: Optional[str] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: Subject of the token
            email: Included for convenience of clients
            expires_delta: Lifetime (default ACCESS_TOKEN_EXPIRE_MINUTES)
            secret_key: Signing key (default SECRET_KEY)

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        payload = {
            "user_id": user_id,
            "email": email,
            "exp": now + lifetime,
            "iat": now,
        }
        return jwt.encode(
            payload,
            secret_key or settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def decode_access_token(token: str, secret_key: Optional[str] = None) -> dict[str, Any]:
        """
        Decode and verify JWT token.

        Args:
            token: JWT token string
            secret_key: Key used for signing (default SECRET_KEY)

        Returns:
            Decoded token payload

        Raises:
            UnauthorizedError: If token is expired or invalid
        """
        try:
            return jwt.decode(
                token,
                secret_key or settings.SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token")

    @staticmethod
    def token_lifetime_seconds() -> int:
        """Lifetime of newly issued tokens, for the ``expires_in`` field."""
        return settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
