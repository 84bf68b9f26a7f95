"""
User Actions

Profiles, follows and suggestions.

Actions:
========
    get_profile        anonymous allowed; is_following for signed-in viewers
    toggle_follow      auth, toggleFollow limit
    update_profile     auth, updateProfile limit
    get_suggestions    auth
    ensure_username    auth; backfills a handle for accounts without one
"""

from typing import Any, Mapping

from agora.shared.actions.base import ActionContext, BaseActions, action, profile_path
from agora.shared.schemas.user import FollowResult, UserProfile, UserPublic, UserSuggestion
from agora.shared.use_cases.users import DEFAULT_SUGGESTION_COUNT
from agora.shared.utils.rate_limiter import user_key


class UserActions(BaseActions):
    """Profile and follow actions."""

    @action
    async def get_profile(self, ctx: ActionContext, username: str) -> UserProfile:
        return await self.use_cases.get_user_profile.execute(
            username,
            current_user_id=ctx.user_id,
        )

    @action
    async def toggle_follow(self, ctx: ActionContext, target_user_id: str) -> FollowResult:
        """Follow or unfollow ``target_user_id`` as the caller."""
        identity = ctx.require_identity()
        self.enforce("toggleFollow", user_key("toggleFollow", identity.id))

        result = await self.use_cases.follow_user.execute(
            follower_id=identity.id,
            following_id=target_user_id,
        )
        await self.revalidate("/", profile_path(identity.username))
        return result

    @action
    async def update_profile(self, ctx: ActionContext, data: Mapping[str, Any]) -> UserProfile:
        """Apply a partial profile update to the caller's account."""
        identity = ctx.require_identity()
        self.enforce("updateProfile", user_key("updateProfile", identity.id))

        profile = await self.use_cases.update_profile.execute(identity.id, data)
        await self.revalidate(profile_path(profile.username))
        return profile

    @action
    async def get_suggestions(
        self,
        ctx: ActionContext,
        limit: int = DEFAULT_SUGGESTION_COUNT,
    ) -> list[UserSuggestion]:
        identity = ctx.require_identity()
        return await self.use_cases.get_suggestions.execute(identity.id, limit)

    @action
    async def ensure_username(self, ctx: ActionContext) -> UserPublic:
        identity = ctx.require_identity()
        user = await self.use_cases.ensure_username.execute(identity.id)
        if user.username != identity.username:
            await self.revalidate(profile_path(user.username))
        return user
