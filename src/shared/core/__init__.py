"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from src.shared.core.logging import logger, get_logger
    from src.shared.core.exceptions import Level2Exception, UnauthorizedError

    logger.info("Starting operation", user_id=user_id)
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    Level2Exception,
    UnauthorizedError,
    AuthenticationError,
    NotFoundError,
    StoryNotFoundError,
    ProfileNotFoundError,
    PublicProfileNotFoundError,
    ValidationError,
    ConflictError,
    StorageError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "Level2Exception",
    "UnauthorizedError",
    "AuthenticationError",
    "NotFoundError",
    "StoryNotFoundError",
    "ProfileNotFoundError",
    "PublicProfileNotFoundError",
    "ValidationError",
    "ConflictError",
    "StorageError",
]
