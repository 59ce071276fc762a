"""
API Handlers

Route handlers for the Level2 API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from src.api.handlers import (
    auth_handler,
    health_handler,
    profile_handler,
    public_handler,
    share_link_handler,
    story_handler,
)

__all__ = [
    "auth_handler",
    "health_handler",
    "profile_handler",
    "public_handler",
    "share_link_handler",
    "story_handler",
]
