"""
StackIt Backend — Answer Schemas
==================================

What:  Request/response contracts for answers, votes and acceptance.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stackit.schemas.common import Pagination
from stackit.schemas.user import UserSummary


class AnswerResponse(BaseModel):
    id: uuid.UUID
    question_id: uuid.UUID
    author: UserSummary
    content: str
    vote_count: int
    is_accepted: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QuestionBrief(BaseModel):
    """Just enough of the parent question to link to it."""
    id: uuid.UUID
    title: str

    model_config = {"from_attributes": True}


class UserAnswerResponse(AnswerResponse):
    """An answer listed on a profile page, next to the question it answers."""
    question: QuestionBrief


class AnswerListResponse(BaseModel):
    answers: List[AnswerResponse]
    pagination: Pagination


class UserAnswerListResponse(BaseModel):
    answers: List[UserAnswerResponse]
    pagination: Pagination


class AnswerMutationResponse(BaseModel):
    message: str
    answer: AnswerResponse


class AcceptResponse(BaseModel):
    message: str
    accepted: bool = Field(description="True if the answer is now the accepted one")


class AnswerCreateRequest(BaseModel):
    question_id: uuid.UUID
    content: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


class AnswerUpdateRequest(BaseModel):
    content: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


# ══════════════════════════════════════════════════════════════════════════
# Voting — shared by questions and answers
# ══════════════════════════════════════════════════════════════════════════


class VoteRequest(BaseModel):
    """
    `vote_type` is deliberately a plain string: an unknown value is a
    business-rule violation answered with 400 "Invalid vote type", not a
    schema error.
    """
    vote_type: str = Field(description="'upvote' or 'downvote'")


class VoteResponse(BaseModel):
    message: str = Field(description="'Vote added|changed|removed successfully'")
    vote_count: int
    user_vote: Optional[str] = Field(
        default=None,
        description="The caller's vote after this request; null when it was removed",
    )
