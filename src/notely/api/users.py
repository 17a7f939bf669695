"""User profile API endpoints."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.models.user import User
from ..core.schemas.auth import (
    UploadResponse,
    UserDetailResponse,
    UserEnvelope,
    UserResponse,
    UserUpdateRequest,
)
from ..core.schemas.common import ErrorResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(
    prefix="/user",
    tags=["user"],
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)


@router.get("", response_model=UserDetailResponse)
async def current_user_profile(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile."""
    return UserDetailResponse(user=UserResponse.model_validate(current_user))


@router.put("/update", response_model=UserEnvelope, responses={409: {"model": ErrorResponse}})
async def update_profile(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    user = await AuthService(session).update_profile(current_user, request)
    return UserEnvelope(
        message="Profile updated successfully", user=UserResponse.model_validate(user)
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_profile_picture(
    profile_picture: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Upload a profile picture (image, 2MB max)."""
    # read one byte past the limit so oversize files are detected without buffering them whole
    limit = get_settings().max_profile_picture_kb * 1024
    data = await profile_picture.read(limit + 1)
    url = await AuthService(session).set_profile_picture(
        current_user, data, profile_picture.content_type or ""
    )
    return UploadResponse(message="Profile picture uploaded successfully", url=url)
