"""
Level2 API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           LEVEL2 API                                        │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Error Handler                                        │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                       Routers                                │          │
│   │  ┌────────┐ ┌──────┐ ┌─────────┐ ┌──────────┐ ┌────────┐    │          │
│   │  │ Health │ │ Auth │ │ Stories │ │ Profiles │ │ Public │    │          │
│   │  └────────┘ └──────┘ └─────────┘ └──────────┘ └────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                app.state (composition root)                  │          │
│   │  ┌──────────┐ ┌──────────────────┐ ┌───────────┐ ┌────────┐ │          │
│   │  │ Database │ │ IdentityProvider │ │ BlobStore │ │ Views  │ │          │
│   │  └──────────┘ └──────────────────┘ └───────────┘ └────────┘ │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. create_application() builds the collaborators from settings
2. Application starts → lifespan startup → database connectivity check
3. Application serves requests
4. Application stops → outstanding view counts drained → database closed

Usage:
======
    # Run with uvicorn
    uvicorn src.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically (tests pass their own collaborators)
    from src.api.main import create_application
    app = create_application(database=Database("sqlite+aiosqlite:///./test.db"))
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import setup_exception_handlers
from src.api.routes import register_routes
from src.config.settings import Settings, settings as default_settings
from src.shared.adapters.blob_store import BlobStore, create_blob_store
from src.shared.core.logging import clear_log_context, get_logger, logger
from src.shared.db.session import Database, create_database
from src.shared.services.auth_service import AuthUser, IdentityProvider, create_identity_provider
from src.shared.services.view_counter import ViewCounter


auth_logger = get_logger("auth")


def _log_auth_state(event: str, user: Optional[AuthUser]) -> None:
    auth_logger.info("Auth state changed", auth_event=event, auth_id=user.id if user else None)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify database connectivity

    Shutdown:
    - Wait for in-flight view count increments
    - Stop listening to auth state changes
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    config: Settings = app.state.settings
    logger.info(
        "Starting Level2 API",
        app_name=config.APP_NAME,
        version=config.APP_VERSION,
        environment=config.APP_ENV,
        auth_backend=config.AUTH_BACKEND,
        blob_store=config.BLOB_STORE_BACKEND,
    )

    await app.state.database.init()
    logger.info("Level2 API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Level2 API")

    await app.state.view_counter.drain()
    app.state.unsubscribe_auth()
    await app.state.database.close()

    logger.info("Level2 API shutdown complete")


def create_application(
    config: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    identity_provider: Optional[IdentityProvider] = None,
    blob_store: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    This is the composition root: every process-wide collaborator is built
    here (or passed in) and stored on app.state.

    Args:
        config: Settings (defaults to the environment)
        database: Database override
        identity_provider: IdentityProvider override
        blob_store: BlobStore override

    Returns:
        Configured FastAPI application instance
    """
    config = config or default_settings

    app = FastAPI(
        title=config.APP_NAME,
        description="Work stories shared through expiring, revocable links",
        version=config.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # COLLABORATORS
    # ═══════════════════════════════════════════════════════════════════════════

    app.state.settings = config
    app.state.database = database or create_database()
    app.state.identity_provider = identity_provider or create_identity_provider(config)
    app.state.blob_store = blob_store or create_blob_store(config)
    app.state.view_counter = ViewCounter(
        app.state.database.session_factory,
        timeout=config.VIEW_COUNT_TIMEOUT_SECONDS,
    )
    app.state.unsubscribe_auth = app.state.identity_provider.on_auth_state_change(_log_auth_state)

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def reset_log_context(request: Request, call_next):
        clear_log_context()
        return await call_next(request)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app, config)

    return app


# Create the application instance
app = create_application()
