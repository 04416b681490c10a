"""
StackIt Backend — User Route Handlers
=======================================

What:  /api/users — own profile plus public profiles by username.

Route order:
    /profile is declared before /{username}; "profile" is a reserved
    username (see AuthService) so no real account is shadowed.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.answer import UserAnswerListResponse
from stackit.schemas.common import ErrorResponse
from stackit.schemas.question import QuestionListResponse
from stackit.schemas.user import (
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    PublicProfileResponse,
    UserResponse,
)
from stackit.security import get_current_user
from stackit.services.answer_service import answer_service
from stackit.services.question_service import question_service
from stackit.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])

NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.get("/profile", response_model=UserResponse, summary="The caller's own profile")
async def get_my_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    responses={400: {"description": "Username already taken", "model": ErrorResponse}},
    summary="Update the caller's profile",
)
async def update_my_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileUpdateResponse:
    return await user_service.update_profile(db, user, body)


@router.get(
    "/{username}",
    response_model=PublicProfileResponse,
    responses=NOT_FOUND,
    summary="Public profile with question/answer/vote totals",
)
async def get_user(
    username: str,
    db: AsyncSession = Depends(get_db_session),
) -> PublicProfileResponse:
    return await user_service.public_profile(db, username)


@router.get(
    "/{username}/questions",
    response_model=QuestionListResponse,
    responses=NOT_FOUND,
    summary="Questions asked by a user, newest first",
)
async def get_user_questions(
    username: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    user = await user_service.get_by_username(db, username)
    return await question_service.list_by_author(db, user.id, page=page, limit=limit)


@router.get(
    "/{username}/answers",
    response_model=UserAnswerListResponse,
    responses=NOT_FOUND,
    summary="Answers written by a user, newest first",
)
async def get_user_answers(
    username: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> UserAnswerListResponse:
    user = await user_service.get_by_username(db, username)
    return await answer_service.list_by_author(db, user.id, page=page, limit=limit)
