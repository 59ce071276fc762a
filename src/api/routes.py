"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /auth                   → Sign-in, sign-out, current user
    /stories                → Work stories and their assets
    /templates              → Story template catalogue
    /profiles               → Shareable profiles
    /share-link             → Legacy single share link
    {PUBLIC_PROFILE_PREFIX} → Public token resolution (unauthenticated)

Usage:
======
    from src.api.routes import register_routes

    app = FastAPI()
    register_routes(app, settings)
"""

from fastapi import FastAPI

from src.api.handlers import (
    auth_handler,
    health_handler,
    profile_handler,
    public_handler,
    share_link_handler,
    story_handler,
)
from src.config.settings import Settings
from src.shared.schemas.common import ErrorResponse


OWNER_ERRORS = {
    401: {"model": ErrorResponse, "description": "No signed-in user"},
    403: {"model": ErrorResponse, "description": "Resource missing or not owned by the caller"},
}


def register_routes(app: FastAPI, config: Settings) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
        config: Settings (for the public path prefix)
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

    # Story endpoints
    app.include_router(
        story_handler.router,
        prefix="/stories",
        tags=["Stories"],
        responses=OWNER_ERRORS,
    )
    app.include_router(
        story_handler.templates_router,
        prefix="/templates",
        tags=["Stories"],
    )

    # Profile endpoints
    app.include_router(
        profile_handler.router,
        prefix="/profiles",
        tags=["Profiles"],
        responses=OWNER_ERRORS,
    )

    # Legacy share link
    app.include_router(
        share_link_handler.router,
        prefix="/share-link",
        tags=["Share Link"],
        responses=OWNER_ERRORS,
    )

    # Public read path
    app.include_router(
        public_handler.router,
        prefix="/" + config.PUBLIC_PROFILE_PREFIX.strip("/"),
        tags=["Public"],
    )
