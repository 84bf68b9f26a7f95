"""
Auth Actions

Credentials sign-up and sign-in. Both are anonymous and rate limited per
client IP.
"""

from typing import Optional

from agora.shared.actions.base import ActionContext, BaseActions, action
from agora.shared.schemas.auth import AuthResponse
from agora.shared.utils.rate_limiter import ip_key


class AuthActions(BaseActions):
    """Sign-up and sign-in."""

    @action
    async def sign_up(
        self,
        ctx: ActionContext,
        email: str,
        password: str,
        name: str,
        username: Optional[str] = None,
    ) -> AuthResponse:
        self.enforce("signUp", ip_key("signUp", ctx.ip))
        return await self.use_cases.sign_up.execute(
            email=email,
            password=password,
            name=name,
            username=username,
        )

    @action
    async def sign_in(self, ctx: ActionContext, email: str, password: str) -> AuthResponse:
        self.enforce("signIn", ip_key("signIn", ctx.ip))
        return await self.use_cases.sign_in.execute(email=email, password=password)
