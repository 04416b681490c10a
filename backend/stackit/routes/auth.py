"""
StackIt Backend — Auth Route Handlers
=======================================

What:  POST /api/auth/register, POST /api/auth/login, GET/PUT /api/auth/profile.
Who:   The SPA's login/register form and its navigation header.

Rate limiting:
    Everything under /api/auth uses the tighter auth bucket of
    RateLimitMiddleware (5 requests / 15 minutes per IP by default).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.common import ErrorResponse
from stackit.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UserResponse,
)
from stackit.security import get_current_user
from stackit.services.auth_service import auth_service
from stackit.services.user_service import user_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=201,
    responses={400: {"description": "Email or username already in use", "model": ErrorResponse}},
    summary="Create an account and receive a bearer token",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.register(db, body)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange email and password for a bearer token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.login(db, body)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="The caller's account",
)
async def get_profile(user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    responses={400: {"description": "Username already taken", "model": ErrorResponse}},
    summary="Update username, bio or avatar",
)
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileUpdateResponse:
    return await user_service.update_profile(db, user, body)
