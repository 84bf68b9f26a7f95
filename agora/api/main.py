"""
Agora API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           AGORA API                                         │
├─────────────────────────────────────────────────────────────────────────────┤
│   Middleware:   CORS, error handler (envelope for every failure)            │
│                              │                                              │
│                              ▼                                              │
│   Routers:      Health │ Auth │ Posts │ Users │ Notifications               │
│                              │                                              │
│                              ▼                                              │
│   Dependencies: Database session │ Identity │ Actions                       │
│                              │                                              │
│                              ▼                                              │
│   app.state:    rate_limiter (RateLimiter), cache_invalidator               │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. create_application() puts the rate limiter and cache invalidator on app.state
2. Lifespan startup checks the database and starts the limiter's sweep task
3. Application serves requests
4. Lifespan shutdown disposes the limiter, closes the invalidator
5. Database connections closed

Usage:
======
    # Run with uvicorn
    uvicorn agora.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from agora.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agora.api.middleware import setup_exception_handlers
from agora.api.routes import register_routes
from agora.config.settings import settings
from agora.shared.adapters.cache_invalidator import CacheInvalidator, build_cache_invalidator
from agora.shared.core.logging import logger
from agora.shared.db import close_db, init_db
from agora.shared.utils.rate_limiter import RateLimiter


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database connection
    - Start the rate limiter's sweep task

    Shutdown:
    - Stop the sweep task and clear counters
    - Close the cache invalidator
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Agora API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    app.state.rate_limiter.start()

    logger.info("Agora API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Agora API")

    await app.state.rate_limiter.dispose()
    await app.state.cache_invalidator.close()
    await close_db()

    logger.info("Agora API shutdown complete")


def create_application(
    rate_limiter: Optional[RateLimiter] = None,
    cache_invalidator: Optional[CacheInvalidator] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        rate_limiter: Limiter to share across requests (default: new instance)
        cache_invalidator: Invalidator (default: per CACHE_INVALIDATION_BACKEND)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Social network API: posts, likes, comments, follows, notifications",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.rate_limiter = rate_limiter or RateLimiter(
        sweep_interval=settings.RATE_LIMIT_SWEEP_INTERVAL_SECONDS,
    )
    app.state.cache_invalidator = cache_invalidator or build_cache_invalidator()

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
