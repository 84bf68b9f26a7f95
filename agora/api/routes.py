"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /auth                   → Sign-up, sign-in, current identity
    /posts                  → Feed, posts, likes, comments
    /users                  → Profiles, follows, suggestions
    /notifications          → Inbox

Usage:
======
    from agora.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from agora.api.handlers import (
    auth_handler,
    health_handler,
    notification_handler,
    post_handler,
    user_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix="/auth",
        tags=["Authentication"],
    )

    app.include_router(
        post_handler.router,
        prefix="/posts",
        tags=["Posts"],
    )

    app.include_router(
        user_handler.router,
        prefix="/users",
        tags=["Users"],
    )

    app.include_router(
        notification_handler.router,
        prefix="/notifications",
        tags=["Notifications"],
    )
