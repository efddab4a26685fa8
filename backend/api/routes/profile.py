"""
Profile endpoints.

Read and update the profile of the authenticated user.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import ProfileResponse, UpdateProfileRequest
from shared.models import Identity

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user: Identity = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """
    Get the current user's stored profile.

    Requires authentication.
    """
    return ProfileResponse(user=await service.get_profile(user))


@router.put("", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    user: Identity = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """
    Change the current user's name and email.

    Tokens already issued keep the old email until they expire.
    """
    updated = await service.update_profile(user, request.name, request.email)
    return ProfileResponse(user=updated)
