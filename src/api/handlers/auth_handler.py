"""
Authentication Handler

Sign-in, sign-out and the signed-in user's own record.

ARCHITECTURE:
=============
    Handler → IdentityProvider → UserRepository
    Handler → AuthService → UserRepository

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here.
"""

from typing import Optional

from fastapi import APIRouter

from src.api.dependencies import (
    AccessToken,
    AuthServiceDep,
    CurrentPrincipal,
    DbSession,
    Provider,
)
from src.shared.schemas.common import MessageResponse
from src.shared.schemas.user import (
    AuthResponse,
    SignInRequest,
    UserResponse,
    UserUpdateRequest,
)


router = APIRouter()


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    provider: Provider,
    db: DbSession,
    credentials: Optional[SignInRequest] = None,
):
    """
    Sign in through the configured identity provider.

    The development provider signs in immediately; the production provider
    rejects this call because sign-in happens at the provider.

    Returns:
        AuthResponse with the user record and session token
    """
    data = credentials.model_dump(exclude_none=True) if credentials else {}
    auth_session = await provider.sign_in(**data)
    user = await provider.get_or_create_user_record(db, auth_session.user)

    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=auth_session.access_token,
        expires_in=auth_session.expires_in,
    )


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(token: AccessToken, provider: Provider):
    """End the current session."""
    await provider.sign_out(token)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=UserResponse)
async def get_me(principal: CurrentPrincipal, auth_service: AuthServiceDep):
    """The signed-in user's record."""
    return await auth_service.get_current_user(principal)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdateRequest,
    principal: CurrentPrincipal,
    auth_service: AuthServiceDep,
):
    """Update name, headline, bio or photo; omitted fields are untouched."""
    return await auth_service.update_current_user(principal, data.model_dump(exclude_unset=True))
