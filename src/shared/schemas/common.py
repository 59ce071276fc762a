"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Generic Responses: MessageResponse, ErrorResponse, HealthResponse
- Mixins: TimestampMixin

Usage:
======
    from src.shared.schemas.common import BaseSchema, TimestampMixin

    class StoryResponse(BaseSchema, TimestampMixin):
        id: UUID
        title: str
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas should inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class OwnerClaimMixin(BaseModel):
    """
    Optional acting user id sent by a client.

    It is only ever compared against the session principal; a mismatch is
    rejected, never substituted.
    """

    user_id: Optional[str] = Field(default=None, description="Acting user id (must match the session)")


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    All API errors return this format for consistency.

    Example:
        {
            "error": {
                "code": "NOT_FOUND",
                "message": "Profile not found",
                "details": {}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "level2"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ═══════════════════════════════════════════════════════════════════════════════
# MIXINS
# ═══════════════════════════════════════════════════════════════════════════════


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields in responses."""

    created_at: datetime
    updated_at: datetime
