"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.shared.schemas.common import BaseSchema, TimestampMixin


class SignInRequest(BaseModel):
    """
    Schema for sign-in against the development identity provider.

    All fields are optional; an empty body signs in as the default dev user.
    """

    auth_id: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, max_length=100)


class UserUpdateRequest(BaseModel):
    """Schema for updating the signed-in user. Omitted fields are left alone."""

    name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_photo_url: Optional[str] = None


class UserResponse(BaseSchema, TimestampMixin):
    """Schema for the signed-in user's own record."""

    id: UUID
    email: Optional[str] = None
    name: str
    headline: Optional[str] = None
    bio: Optional[str] = None
    profile_photo_url: Optional[str] = None


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
