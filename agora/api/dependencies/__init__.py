"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_optional_identity(), OptionalIdentity
- Services: get_actions(), get_action_context(), AppActions, Context

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        actions: Actions = Depends(get_actions),
        ctx: ActionContext = Depends(get_action_context),
    ):

    # Write this:
    async def handler(actions: AppActions, ctx: Context):
"""

from agora.api.dependencies.database import (
    get_db,
    DbSession,
)
from agora.api.dependencies.auth import (
    get_bearer_token,
    get_optional_identity,
    OptionalIdentity,
)
from agora.api.dependencies.services import (
    get_actions,
    get_action_context,
    get_cache_invalidator,
    get_client_ip,
    get_rate_limiter,
    AppActions,
    Context,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_bearer_token",
    "get_optional_identity",
    "OptionalIdentity",
    # Services
    "get_actions",
    "get_action_context",
    "get_cache_invalidator",
    "get_client_ip",
    "get_rate_limiter",
    "AppActions",
    "Context",
]
