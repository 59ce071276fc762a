"""
Authentication Dependencies

FastAPI dependencies that turn a bearer token into the request principal.

Dependency Hierarchy:
=====================
    get_access_token()        ← Bearer token from the Authorization header
           │
           ▼
    get_identity_provider()   ← Provider built by the application factory
           │
           ▼
    get_current_principal()   ← Provider identity → users row → Principal

Type Aliases:
=============
    AccessToken       - Raw bearer token
    Provider          - The configured IdentityProvider
    CurrentPrincipal  - Principal(user_id, auth_id, email)

Usage:
======
    from src.api.dependencies.auth import CurrentPrincipal

    @router.get("/profiles")
    async def list_profiles(principal: CurrentPrincipal, service: ProfileServiceDep):
        return await service.list_profiles(principal)
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.api.dependencies.database import DbSession
from src.shared.core.exceptions import AuthenticationError
from src.shared.core.logging import log_context
from src.shared.services.auth_service import IdentityProvider, Principal


# auto_error=False so a missing header maps to our own 401 shape
security = HTTPBearer(auto_error=False)


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


async def get_access_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Authorization header required")
    return credentials.credentials


async def get_current_principal(
    db: DbSession,
    token: Annotated[str, Depends(get_access_token)],
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> Principal:
    """
    Resolve the session principal.

    Raises:
        AuthenticationError: If the provider rejects the token
    """
    auth_user = await provider.get_current_user(token)
    if auth_user is None:
        raise AuthenticationError("Invalid or expired session")

    user = await provider.get_or_create_user_record(db, auth_user)
    log_context(user_id=str(user.id))
    return Principal(user_id=user.id, auth_id=user.auth_id, email=user.email)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

AccessToken = Annotated[str, Depends(get_access_token)]
Provider = Annotated[IdentityProvider, Depends(get_identity_provider)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
