"""
StackIt Backend — Question Route Handlers
===========================================

What:  /api/questions — listing, detail, CRUD, "my" views and voting.
How:   Extracts query/body parameters, delegates to QuestionService or
       VoteService, returns their response models unchanged.

Route order:
    /my-questions and /my-activity are declared before /{question_id} so
    they are never parsed as an id.
"""

import uuid

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.answer import VoteRequest, VoteResponse
from stackit.schemas.common import ErrorResponse, MessageResponse
from stackit.schemas.question import (
    ActivityResponse,
    QuestionCreateRequest,
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionMutationResponse,
    QuestionUpdateRequest,
)
from stackit.security import get_current_user
from stackit.services.question_service import question_service
from stackit.services.vote_service import vote_service

router = APIRouter(prefix="/api/questions", tags=["Questions"])

SORT_DESCRIPTION = "newest (default), oldest, votes or views"


@router.get(
    "",
    response_model=QuestionListResponse,
    summary="List questions with filters and pagination",
)
async def list_questions(
    response: Response,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    tags: str | None = Query(default=None, description="Comma-separated tag names (match any)"),
    search: str | None = Query(default=None, description="Substring of title or description"),
    sort: str = Query(default="newest", description=SORT_DESCRIPTION),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    result = await question_service.list_questions(
        db=db, page=page, limit=limit, tags=tags, search=search, sort=sort,
    )
    response.headers["X-Total-Count"] = str(result.pagination.total_count)
    return result


@router.get(
    "/my-questions",
    response_model=QuestionListResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Questions asked by the caller",
)
async def my_questions(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort: str = Query(default="newest", description=SORT_DESCRIPTION),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    return await question_service.list_by_author(db, user.id, page=page, limit=limit, sort=sort)


@router.get(
    "/my-activity",
    response_model=ActivityResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="The caller's questions and answers, newest first",
)
async def my_activity(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ActivityResponse:
    return await question_service.my_activity(db, user, page=page, limit=limit)


@router.get(
    "/{question_id}",
    response_model=QuestionDetailResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Question detail (counts as a view)",
)
async def get_question(
    question_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionDetailResponse:
    return await question_service.get_question(db, question_id)


@router.post(
    "",
    response_model=QuestionMutationResponse,
    status_code=201,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Ask a question",
)
async def create_question(
    body: QuestionCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionMutationResponse:
    return await question_service.create_question(db, user, body)


@router.put(
    "/{question_id}",
    response_model=QuestionMutationResponse,
    responses={
        403: {"description": "Not the author", "model": ErrorResponse},
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Edit your own question",
)
async def update_question(
    question_id: uuid.UUID,
    body: QuestionUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionMutationResponse:
    return await question_service.update_question(db, user, question_id, body)


@router.delete(
    "/{question_id}",
    response_model=MessageResponse,
    responses={
        403: {"description": "Neither the author nor an admin", "model": ErrorResponse},
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Delete a question with its answers and votes",
)
async def delete_question(
    question_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await question_service.delete_question(db, user, question_id)


@router.post(
    "/{question_id}/vote",
    response_model=VoteResponse,
    responses={
        400: {"description": "Invalid vote type", "model": ErrorResponse},
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Upvote/downvote a question; repeating the same vote removes it",
)
async def vote_question(
    question_id: uuid.UUID,
    body: VoteRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> VoteResponse:
    return await vote_service.vote_question(db, question_id, user, body.vote_type)
