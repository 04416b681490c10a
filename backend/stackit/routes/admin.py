"""
StackIt Backend — Admin Route Handlers
========================================

What:  /api/admin — user and question overview, forced question deletion.
Who:   Accounts with role 'admin' only (require_admin → 403 otherwise).
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.common import ErrorResponse, MessageResponse
from stackit.schemas.question import AdminQuestionListResponse
from stackit.schemas.user import UserListResponse
from stackit.security import require_admin
from stackit.services.question_service import question_service
from stackit.services.user_service import user_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    responses={403: {"description": "Admin access required", "model": ErrorResponse}},
)


@router.get("/users", response_model=UserListResponse, summary="All users")
async def list_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> UserListResponse:
    return await user_service.list_users(db)


@router.get("/questions", response_model=AdminQuestionListResponse, summary="All questions, newest first")
async def list_questions(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> AdminQuestionListResponse:
    return await question_service.list_all(db)


@router.delete(
    "/questions/{question_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Delete any question",
)
async def delete_question(
    question_id: uuid.UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await question_service.delete_question(db, admin, question_id)
