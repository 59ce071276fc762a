"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling

Usage:
======
    from src.api.middleware import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from src.api.middleware.error_handler import NO_STORE, setup_exception_handlers

__all__ = [
    "NO_STORE",
    "setup_exception_handlers",
]
