"""
StackIt Backend — Answer Route Handlers
=========================================

What:  /api/answers — per-question listing, CRUD, voting and acceptance.
"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.answer import (
    AcceptResponse,
    AnswerCreateRequest,
    AnswerListResponse,
    AnswerMutationResponse,
    AnswerUpdateRequest,
    VoteRequest,
    VoteResponse,
)
from stackit.schemas.common import ErrorResponse, MessageResponse
from stackit.security import get_current_user
from stackit.services.answer_service import answer_service
from stackit.services.vote_service import vote_service

router = APIRouter(prefix="/api/answers", tags=["Answers"])


@router.get(
    "/question/{question_id}",
    response_model=AnswerListResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Answers to a question",
)
async def list_answers(
    question_id: uuid.UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort: str = Query(default="votes", description="votes (default), newest or oldest"),
    db: AsyncSession = Depends(get_db_session),
) -> AnswerListResponse:
    return await answer_service.list_for_question(db, question_id, page=page, limit=limit, sort=sort)


@router.post(
    "",
    response_model=AnswerMutationResponse,
    status_code=201,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Answer a question (notifies the question author)",
)
async def create_answer(
    body: AnswerCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AnswerMutationResponse:
    return await answer_service.create_answer(db, user, body)


@router.put(
    "/{answer_id}",
    response_model=AnswerMutationResponse,
    responses={
        403: {"description": "Not the author", "model": ErrorResponse},
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Edit your own answer",
)
async def update_answer(
    answer_id: uuid.UUID,
    body: AnswerUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AnswerMutationResponse:
    return await answer_service.update_answer(db, user, answer_id, body)


@router.delete(
    "/{answer_id}",
    response_model=MessageResponse,
    responses={
        403: {"description": "Neither the author nor an admin", "model": ErrorResponse},
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Delete an answer",
)
async def delete_answer(
    answer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await answer_service.delete_answer(db, user, answer_id)


@router.post(
    "/{answer_id}/vote",
    response_model=VoteResponse,
    responses={
        400: {"description": "Invalid vote type", "model": ErrorResponse},
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Upvote/downvote an answer; repeating the same vote removes it",
)
async def vote_answer(
    answer_id: uuid.UUID,
    body: VoteRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> VoteResponse:
    return await vote_service.vote_answer(db, answer_id, user, body.vote_type)


@router.post(
    "/{answer_id}/accept",
    response_model=AcceptResponse,
    responses={
        403: {"description": "Not the question author", "model": ErrorResponse},
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Accept an answer, or unaccept it if it already is",
)
async def accept_answer(
    answer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AcceptResponse:
    return await answer_service.accept_answer(db, user, answer_id)
