"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Share tokens and JWT management
- validation: Input bounds, sanitizers and YouTube URL helpers

Usage:
======
    from src.shared.utils.security import SecurityUtils, generate_share_token
    from src.shared.utils.validation import validate_story_title
"""

from src.shared.utils.security import (
    SHARE_TOKEN_ALPHABET,
    SHARE_TOKEN_LENGTH,
    SecurityUtils,
    generate_share_token,
)

__all__ = [
    "SHARE_TOKEN_ALPHABET",
    "SHARE_TOKEN_LENGTH",
    "SecurityUtils",
    "generate_share_token",
]
