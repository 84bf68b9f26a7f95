"""
Auth Use Cases

Credentials sign-up and sign-in, and resolving a bearer token to an
Identity.

Flow:
=====
    SignUpUseCase
        1. Validate email / password / name / username
        2. Reject an email that is already registered (409)
        3. Allocate a handle (explicit username, else from the email)
        4. Hash the password (bcrypt) and insert the account
        5. Issue an access token

    SignInUseCase
        1. Validate email / password
        2. Look up the account; compare bcrypt hashes
        3. Issue an access token

    The same "Invalid email or password" message is returned for an
    unknown email and for a wrong password.

Usage:
======
    use_case = SignUpUseCase(user_repository)
    auth = await use_case.execute(email="jane@example.com", password="Passw0rd!", name="Jane")
    auth.access_token
"""

from typing import Optional

from agora.shared.core.exceptions import ConflictError, UnauthorizedError
from agora.shared.core.logging import auth_logger
from agora.shared.repositories.interfaces import UserRepository
from agora.shared.schemas.auth import AuthResponse, Identity
from agora.shared.schemas.user import UserPublic
from agora.shared.schemas.validation import SignInInput, SignUpInput, validate
from agora.shared.use_cases.users import allocate_username, base_username_from_email
from agora.shared.utils.security import SecurityUtils


def _issue_token(user: UserPublic) -> AuthResponse:
    token = SecurityUtils.create_access_token(user_id=user.id, email=user.email)
    return AuthResponse(
        user=user,
        access_token=token,
        expires_in=SecurityUtils.token_lifetime_seconds(),
    )


class SignUpUseCase:
    """Create an account with email and password."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(
        self,
        email: str,
        password: str,
        name: str,
        username: Optional[str] = None,
    ) -> AuthResponse:
        """
        Args:
            email: Trimmed and lower-cased before use
            password: 8..100 chars with upper, lower and a digit
            name: Display name
            username: Preferred handle; a numeric suffix is added if taken

        Returns:
            AuthResponse with the new user and an access token

        Raises:
            ValidationError: Invalid input
            ConflictError: Email already in use
        """
        data = validate(
            SignUpInput,
            {"email": email, "password": password, "name": name, "username": username},
        )

        if await self.user_repository.exists_by_email(data.email):
            auth_logger.warning("Sign-up with registered email rejected")
            raise ConflictError("Email already in use", resource="User")

        handle = await allocate_username(
            self.user_repository,
            data.username or base_username_from_email(data.email),
        )
        user = await self.user_repository.create(
            email=data.email,
            name=data.name,
            password_hash=SecurityUtils.hash_password(data.password),
            username=handle,
        )

        auth_logger.info("User signed up", user_id=user.id, username=user.username)
        return _issue_token(user)


class SignInUseCase:
    """Exchange email and password for an access token."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, email: str, password: str) -> AuthResponse:
        """
        Raises:
            ValidationError: Malformed email or empty password
            UnauthorizedError: Unknown email or wrong password
        """
        data = validate(SignInInput, {"email": email, "password": password})

        record = await self.user_repository.find_by_email(data.email)
        if record is None or not SecurityUtils.verify_password(data.password, record.password_hash):
            auth_logger.warning("Sign-in failed")
            raise UnauthorizedError("Invalid email or password")

        user = UserPublic(
            id=record.id,
            email=record.email,
            username=record.username,
            name=record.name,
            image=record.image,
        )
        auth_logger.info("User signed in", user_id=user.id)
        return _issue_token(user)


class ResolveIdentityUseCase:
    """
    Bearer token → Identity.

    The token must be valid and its user must still exist.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, token: str) -> Identity:
        """
        Raises:
            UnauthorizedError: Expired or invalid token, or deleted user
        """
        payload = SecurityUtils.decode_access_token(token)
        user_id = payload.get("user_id")
        if not user_id:
            raise UnauthorizedError("Invalid token")

        profile = await self.user_repository.find_by_id(user_id)
        if profile is None:
            raise UnauthorizedError("User no longer exists")

        return Identity(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            image=profile.image,
            username=profile.username,
        )
