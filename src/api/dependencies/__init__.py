"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_principal(), CurrentPrincipal
- Services: get_*_service() functions and *ServiceDep aliases

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        principal: Principal = Depends(get_current_principal)
    ):

    # Write this:
    async def handler(db: DbSession, principal: CurrentPrincipal):
"""

from src.api.dependencies.database import (
    get_db,
    get_database,
    DbSession,
)
from src.api.dependencies.auth import (
    get_access_token,
    get_current_principal,
    get_identity_provider,
    AccessToken,
    CurrentPrincipal,
    Provider,
)
from src.api.dependencies.services import (
    AssetServiceDep,
    AuthServiceDep,
    ProfileServiceDep,
    PublicProfileServiceDep,
    ShareLinkServiceDep,
    StoryServiceDep,
)

__all__ = [
    # Database
    "get_db",
    "get_database",
    "DbSession",
    # Authentication
    "get_access_token",
    "get_current_principal",
    "get_identity_provider",
    "AccessToken",
    "CurrentPrincipal",
    "Provider",
    # Services
    "AssetServiceDep",
    "AuthServiceDep",
    "ProfileServiceDep",
    "PublicProfileServiceDep",
    "ShareLinkServiceDep",
    "StoryServiceDep",
]
