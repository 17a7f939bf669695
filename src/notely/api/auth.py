"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)
from ..core.schemas.common import ErrorResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import bearer_token

router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user and return their first token."""
    user, token = await AuthService(session).register(request)
    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Exchange email and password for a fresh token."""
    user, token = await AuthService(session).login(request)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/logout", response_model=UserEnvelope)
async def logout(
    token: Optional[str] = Depends(bearer_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke the token used for this request."""
    user = await AuthService(session).logout(token)
    return UserEnvelope(message="Logout successful", user=UserResponse.model_validate(user))
