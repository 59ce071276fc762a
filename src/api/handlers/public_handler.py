"""
Public Profile Handler

The only unauthenticated content endpoint: {PUBLIC_PROFILE_PREFIX}/{token}.

Responses are never cacheable, so toggling a profile off or passing its
expiry takes effect on the very next request. Every miss is the same 404.
"""

from fastapi import APIRouter, Response

from src.api.dependencies import PublicProfileServiceDep
from src.api.middleware import NO_STORE
from src.shared.schemas.common import ErrorResponse
from src.shared.schemas.public import PublicProfileView


router = APIRouter()


@router.get(
    "/{token}",
    response_model=PublicProfileView,
    responses={404: {"model": ErrorResponse, "description": "No public profile for this token"}},
)
async def get_public_profile(token: str, response: Response, service: PublicProfileServiceDep):
    """
    Resolve a share token.

    Returns:
        PublicProfileView (owner display fields and ordered stories)

    Raises:
        404: Unknown, malformed, inactive or expired token
    """
    response.headers.update(NO_STORE)
    return await service.resolve_public_profile(token)
