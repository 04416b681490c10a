"""
StackIt Backend — Question Schemas
====================================

What:  Request/response contracts for questions, question listings and
       the "my activity" feed.

Listing strategy:
    Offset pagination (page/limit) rather than the cursor style used for
    infinite scroll: the SPA renders numbered pages and needs total_pages.
"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from stackit.schemas.answer import AnswerResponse
from stackit.schemas.common import Pagination
from stackit.schemas.tag import TagResponse
from stackit.schemas.user import UserSummary

QUESTION_SORTS = ("newest", "oldest", "votes", "views")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class QuestionResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    author: UserSummary
    tags: List[TagResponse]
    views: int
    vote_count: int
    answer_count: int
    accepted_answer_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QuestionDetailResponse(QuestionResponse):
    """Detail view: the accepted answer is embedded so the page renders it first."""
    accepted_answer: Optional[AnswerResponse] = None


class QuestionListResponse(BaseModel):
    questions: List[QuestionResponse]
    pagination: Pagination


class QuestionMutationResponse(BaseModel):
    message: str
    question: QuestionResponse


class AdminQuestionListResponse(BaseModel):
    questions: List[QuestionResponse]


class ActivityItem(BaseModel):
    """
    One entry of the "my activity" feed.

    For questions `title`/`body` are the question's own; for answers
    `title` is the answered question's title and `body` the answer text.
    """
    type: Literal["question", "answer"]
    id: uuid.UUID
    question_id: uuid.UUID
    title: str
    body: str
    vote_count: int
    created_at: datetime


class ActivityStats(BaseModel):
    total_questions: int
    total_answers: int
    total_activity: int


class ActivityResponse(BaseModel):
    activity: List[ActivityItem]
    stats: ActivityStats
    pagination: Pagination


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


def _check_tag_lengths(names: List[str]) -> List[str]:
    """Tag names are capped at 50 characters, like the tags table column."""
    for name in names:
        if len(name.strip()) > 50:
            raise ValueError(f"Tag '{name[:20]}...' is longer than 50 characters")
    return names


class QuestionCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list, description="Tag names; created on first use")

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _check_tag_lengths(v)


class QuestionUpdateRequest(BaseModel):
    """Partial update; `tags`, when present, replaces the whole tag set."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[List[str]] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _check_tag_lengths(v)
