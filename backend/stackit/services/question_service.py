"""
StackIt Backend — Question Service
====================================

What:  Business rules for questions: listing, detail (with view counting),
       create/update/delete with tag bookkeeping, and the "my activity" feed.
Who:   Called by routes/questions.py, routes/users.py and routes/admin.py.

Delete cascade (one transaction, see database.get_db_session):
    ┌────────────────┐   ┌──────────────┐   ┌──────────┐   ┌────────────┐
    │ answer votes + │──▶│   answers    │──▶│ question │──▶│ tag counts │
    │ notifications  │   │ question     │   │   row    │   │   -1 each  │
    └────────────────┘   │   votes      │   └──────────┘   └────────────┘
                         └──────────────┘
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stackit.exceptions import NotFoundError, PermissionDeniedError
from stackit.models.answer import Answer
from stackit.models.notification import Notification
from stackit.models.question import Question
from stackit.models.tag import Tag
from stackit.models.user import User
from stackit.models.vote import AnswerVote, QuestionVote
from stackit.schemas.answer import AnswerResponse
from stackit.schemas.common import MessageResponse
from stackit.schemas.question import (
    ActivityItem,
    ActivityResponse,
    ActivityStats,
    AdminQuestionListResponse,
    QuestionCreateRequest,
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionMutationResponse,
    QuestionResponse,
    QuestionUpdateRequest,
)
from stackit.services.pagination import build_pagination, page_offset
from stackit.services.tag_service import escape_like, normalize_tag_names, tag_service

logger = logging.getLogger(__name__)

# Unknown sort keys fall back to "newest"
SORT_ORDERS = {
    "newest": (Question.created_at.desc(),),
    "oldest": (Question.created_at.asc(),),
    "votes": (Question.vote_count.desc(), Question.created_at.desc()),
    "views": (Question.views.desc(), Question.created_at.desc()),
}


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; PostgreSQL keeps the offset
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class QuestionService:
    """
    Responsibilities:
        - list_questions(): public listing with tag/search filters
        - list_by_author(): "my questions" and profile pages
        - get_question(): detail view, bumps the view counter
        - create/update/delete with tag counters
        - my_activity(): merged question/answer feed
    """

    async def list_questions(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        tags: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "newest",
    ) -> QuestionListResponse:
        """
        Filters:
            tags:   comma-separated tag names, a question matches if it has ANY of them
            search: case-insensitive substring of title or description
        """
        conditions = []
        if search and search.strip():
            pattern = f"%{escape_like(search.strip())}%"
            conditions.append(or_(
                Question.title.ilike(pattern, escape="\\"),
                Question.description.ilike(pattern, escape="\\"),
            ))
        if tags:
            names = normalize_tag_names(tags.split(","))
            if names:
                conditions.append(Question.tags.any(Tag.name.in_(names)))

        return await self._page(db, conditions, page, limit, sort)

    async def list_by_author(
        self,
        db: AsyncSession,
        author_id: uuid.UUID,
        page: int = 1,
        limit: int = 10,
        sort: str = "newest",
    ) -> QuestionListResponse:
        return await self._page(db, [Question.author_id == author_id], page, limit, sort)

    async def list_all(self, db: AsyncSession) -> AdminQuestionListResponse:
        """Unpaginated, newest first; admin dashboard only."""
        result = await db.execute(select(Question).order_by(Question.created_at.desc()))
        return AdminQuestionListResponse(
            questions=[QuestionResponse.model_validate(q) for q in result.scalars().all()]
        )

    async def get_question(self, db: AsyncSession, question_id: uuid.UUID) -> QuestionDetailResponse:
        """Detail view; every call counts as one view."""
        question = await self.get_or_404(db, question_id)
        question.views += 1
        await db.flush()

        accepted = None
        if question.accepted_answer_id is not None:
            answer = await db.get(Answer, question.accepted_answer_id)
            if answer is not None:
                accepted = AnswerResponse.model_validate(answer)

        detail = QuestionDetailResponse.model_validate(question)
        detail.accepted_answer = accepted
        return detail

    async def create_question(
        self,
        db: AsyncSession,
        author: User,
        data: QuestionCreateRequest,
    ) -> QuestionMutationResponse:
        tags = await tag_service.attach_tags(db, data.tags)
        question = Question(
            title=data.title,
            description=data.description,
            author_id=author.id,
            author=author,
            tags=tags,
        )
        db.add(question)
        await db.flush()
        logger.info("Question %s created by %s with %d tags", question.id, author.id, len(tags))

        return QuestionMutationResponse(
            message="Question created successfully",
            question=QuestionResponse.model_validate(question),
        )

    async def update_question(
        self,
        db: AsyncSession,
        user: User,
        question_id: uuid.UUID,
        data: QuestionUpdateRequest,
    ) -> QuestionMutationResponse:
        question = await self.get_or_404(db, question_id)
        if question.author_id != user.id:
            raise PermissionDeniedError(message="You can only edit your own questions")

        if data.tags is not None:
            await tag_service.release_tags(db, question.tags)
            question.tags = await tag_service.attach_tags(db, data.tags)
        if data.title:
            question.title = data.title
        if data.description:
            question.description = data.description

        await db.flush()
        return QuestionMutationResponse(
            message="Question updated successfully",
            question=QuestionResponse.model_validate(question),
        )

    async def delete_question(
        self,
        db: AsyncSession,
        user: User,
        question_id: uuid.UUID,
    ) -> MessageResponse:
        """Author or admin only; removes everything hanging off the question."""
        question = await self.get_or_404(db, question_id)
        if question.author_id != user.id and not user.is_admin:
            raise PermissionDeniedError(message="You can only delete your own questions")

        await self.purge(db, question)
        return MessageResponse(message="Question deleted successfully")

    async def purge(self, db: AsyncSession, question: Question) -> None:
        """Delete a question with its answers, votes, notifications and tag usage."""
        answer_ids = select(Answer.id).where(Answer.question_id == question.id)

        await db.execute(
            delete(AnswerVote)
            .where(AnswerVote.answer_id.in_(answer_ids))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Notification)
            .where(or_(Notification.entity_id == question.id, Notification.entity_id.in_(answer_ids)))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Answer)
            .where(Answer.question_id == question.id)
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(QuestionVote)
            .where(QuestionVote.question_id == question.id)
            .execution_options(synchronize_session=False)
        )

        await tag_service.release_tags(db, question.tags)
        await db.delete(question)
        await db.flush()
        logger.info("Question %s deleted", question.id)

    async def my_activity(
        self,
        db: AsyncSession,
        user: User,
        page: int = 1,
        limit: int = 10,
    ) -> ActivityResponse:
        """
        The caller's questions and answers, newest first.

        Each page takes up to limit // 2 of each kind (at least one), merges
        them by creation time and trims to `limit`.
        """
        half = max(limit // 2, 1)
        offset = page_offset(page, half)

        questions = (
            await db.execute(
                select(Question)
                .where(Question.author_id == user.id)
                .order_by(Question.created_at.desc())
                .offset(offset)
                .limit(half)
            )
        ).scalars().all()
        answers = (
            await db.execute(
                select(Answer)
                .options(selectinload(Answer.question))
                .where(Answer.author_id == user.id)
                .order_by(Answer.created_at.desc())
                .offset(offset)
                .limit(half)
                .execution_options(populate_existing=True)
            )
        ).scalars().all()

        items: List[ActivityItem] = [
            ActivityItem(
                type="question",
                id=q.id,
                question_id=q.id,
                title=q.title,
                body=q.description,
                vote_count=q.vote_count,
                created_at=q.created_at,
            )
            for q in questions
        ]
        items.extend(
            ActivityItem(
                type="answer",
                id=a.id,
                question_id=a.question_id,
                title=a.question.title,
                body=a.content,
                vote_count=a.vote_count,
                created_at=a.created_at,
            )
            for a in answers
        )
        items.sort(key=lambda item: _as_utc(item.created_at), reverse=True)

        total_questions = await self._count(db, Question, Question.author_id == user.id)
        total_answers = await self._count(db, Answer, Answer.author_id == user.id)
        total = total_questions + total_answers

        return ActivityResponse(
            activity=items[:limit],
            stats=ActivityStats(
                total_questions=total_questions,
                total_answers=total_answers,
                total_activity=total,
            ),
            pagination=build_pagination(page, limit, total),
        )

    async def get_or_404(self, db: AsyncSession, question_id: uuid.UUID) -> Question:
        question = await db.get(Question, question_id)
        if question is None:
            raise NotFoundError(resource="question", resource_id=str(question_id))
        return question

    async def _page(
        self,
        db: AsyncSession,
        conditions: list,
        page: int,
        limit: int,
        sort: str,
    ) -> QuestionListResponse:
        order_by = SORT_ORDERS.get(sort, SORT_ORDERS["newest"])
        result = await db.execute(
            select(Question)
            .where(*conditions)
            .order_by(*order_by)
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        questions = result.scalars().all()
        total = await self._count(db, Question, *conditions)

        return QuestionListResponse(
            questions=[QuestionResponse.model_validate(q) for q in questions],
            pagination=build_pagination(page, limit, total),
        )

    @staticmethod
    async def _count(db: AsyncSession, model, *conditions) -> int:
        result = await db.execute(select(func.count(model.id)).where(*conditions))
        return result.scalar() or 0


question_service = QuestionService()
