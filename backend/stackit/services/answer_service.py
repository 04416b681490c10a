"""
StackIt Backend — Answer Service
==================================

What:  Business rules for answers: listing, create/update/delete with the
       question's answer_count, and the accept/unaccept toggle.
Who:   Called by routes/answers.py and routes/users.py.

Accepting (question author only):

    answer already accepted  → unaccept it              (accepted: false)
    otherwise                → it replaces any previous  (accepted: true)
                               accepted answer and its
                               author is notified

Both Question.accepted_answer_id and Answer.is_accepted are updated
together, so they always agree.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stackit.exceptions import NotFoundError, PermissionDeniedError
from stackit.models.answer import Answer
from stackit.models.notification import Notification
from stackit.models.question import Question
from stackit.models.user import User
from stackit.models.vote import AnswerVote
from stackit.schemas.answer import (
    AcceptResponse,
    AnswerCreateRequest,
    AnswerListResponse,
    AnswerMutationResponse,
    AnswerResponse,
    AnswerUpdateRequest,
    UserAnswerListResponse,
    UserAnswerResponse,
)
from stackit.schemas.common import MessageResponse
from stackit.services.notification_service import notification_service
from stackit.services.pagination import build_pagination, page_offset

logger = logging.getLogger(__name__)

# "votes": best first, newest first among ties
SORT_ORDERS = {
    "votes": (Answer.vote_count.desc(), Answer.created_at.desc()),
    "newest": (Answer.created_at.desc(),),
    "oldest": (Answer.created_at.asc(),),
}


class AnswerService:

    async def list_for_question(
        self,
        db: AsyncSession,
        question_id: uuid.UUID,
        page: int = 1,
        limit: int = 10,
        sort: str = "votes",
    ) -> AnswerListResponse:
        if await db.get(Question, question_id) is None:
            raise NotFoundError(resource="question", resource_id=str(question_id))

        order_by = SORT_ORDERS.get(sort, SORT_ORDERS["votes"])
        result = await db.execute(
            select(Answer)
            .where(Answer.question_id == question_id)
            .order_by(*order_by)
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        answers = result.scalars().all()
        total = await self._count(db, Answer.question_id == question_id)

        return AnswerListResponse(
            answers=[AnswerResponse.model_validate(a) for a in answers],
            pagination=build_pagination(page, limit, total),
        )

    async def list_by_author(
        self,
        db: AsyncSession,
        author_id: uuid.UUID,
        page: int = 1,
        limit: int = 10,
    ) -> UserAnswerListResponse:
        result = await db.execute(
            select(Answer)
            .options(selectinload(Answer.question))
            .where(Answer.author_id == author_id)
            .order_by(Answer.created_at.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        answers = result.scalars().all()
        total = await self._count(db, Answer.author_id == author_id)

        return UserAnswerListResponse(
            answers=[UserAnswerResponse.model_validate(a) for a in answers],
            pagination=build_pagination(page, limit, total),
        )

    async def create_answer(
        self,
        db: AsyncSession,
        author: User,
        data: AnswerCreateRequest,
    ) -> AnswerMutationResponse:
        question = await db.get(Question, data.question_id)
        if question is None:
            raise NotFoundError(resource="question", resource_id=str(data.question_id))

        answer = Answer(
            question_id=question.id,
            author_id=author.id,
            author=author,
            content=data.content,
        )
        db.add(answer)
        question.answer_count += 1
        await db.flush()
        logger.info("Answer %s posted on question %s by %s", answer.id, question.id, author.id)

        await notification_service.notify(
            db,
            recipient_id=question.author_id,
            actor=author,
            type="answer",
            entity_id=answer.id,
            entity_type="answer",
            message=f'{author.username} answered your question "{question.title}"',
        )

        return AnswerMutationResponse(
            message="Answer created successfully",
            answer=AnswerResponse.model_validate(answer),
        )

    async def update_answer(
        self,
        db: AsyncSession,
        user: User,
        answer_id: uuid.UUID,
        data: AnswerUpdateRequest,
    ) -> AnswerMutationResponse:
        answer = await self.get_or_404(db, answer_id)
        if answer.author_id != user.id:
            raise PermissionDeniedError(message="You can only edit your own answers")

        answer.content = data.content
        await db.flush()
        return AnswerMutationResponse(
            message="Answer updated successfully",
            answer=AnswerResponse.model_validate(answer),
        )

    async def delete_answer(
        self,
        db: AsyncSession,
        user: User,
        answer_id: uuid.UUID,
    ) -> MessageResponse:
        answer = await self.get_or_404(db, answer_id)
        if answer.author_id != user.id and not user.is_admin:
            raise PermissionDeniedError(message="You can only delete your own answers")

        question = await db.get(Question, answer.question_id)
        if question is not None:
            question.answer_count = max(0, question.answer_count - 1)
            if question.accepted_answer_id == answer.id:
                question.accepted_answer_id = None

        await db.execute(
            delete(AnswerVote)
            .where(AnswerVote.answer_id == answer.id)
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Notification)
            .where(Notification.entity_id == answer.id)
            .execution_options(synchronize_session=False)
        )
        await db.delete(answer)
        await db.flush()
        logger.info("Answer %s deleted by %s", answer_id, user.id)
        return MessageResponse(message="Answer deleted successfully")

    async def accept_answer(
        self,
        db: AsyncSession,
        user: User,
        answer_id: uuid.UUID,
    ) -> AcceptResponse:
        answer = await self.get_or_404(db, answer_id)
        question = await db.get(Question, answer.question_id)
        if question is None:
            raise NotFoundError(resource="question", resource_id=str(answer.question_id))
        if question.author_id != user.id:
            raise PermissionDeniedError(message="Only the question author can accept answers")

        if question.accepted_answer_id == answer.id:
            question.accepted_answer_id = None
            answer.is_accepted = False
            await db.flush()
            return AcceptResponse(message="Answer unaccepted successfully", accepted=False)

        if question.accepted_answer_id is not None:
            previous = await db.get(Answer, question.accepted_answer_id)
            if previous is not None:
                previous.is_accepted = False

        question.accepted_answer_id = answer.id
        answer.is_accepted = True
        await db.flush()
        logger.info("Answer %s accepted on question %s", answer.id, question.id)

        await notification_service.notify(
            db,
            recipient_id=answer.author_id,
            actor=user,
            type="accept",
            entity_id=answer.id,
            entity_type="answer",
            message=f'{user.username} accepted your answer to "{question.title}"',
        )
        return AcceptResponse(message="Answer accepted successfully", accepted=True)

    async def get_or_404(self, db: AsyncSession, answer_id: uuid.UUID) -> Answer:
        answer = await db.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError(resource="answer", resource_id=str(answer_id))
        return answer

    @staticmethod
    async def _count(db: AsyncSession, *conditions) -> int:
        result = await db.execute(select(func.count(Answer.id)).where(*conditions))
        return result.scalar() or 0


answer_service = AnswerService()
