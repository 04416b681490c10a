"""
StackIt Backend — Vote Service
================================

What:  The vote toggle shared by questions and answers.
Why:   Both item kinds follow exactly the same rules; keeping one
       implementation means the two can never drift apart.

State machine (existing vote of the caller → requested vote):

    none      + X  → store X           ("added")
    X         + X  → delete the vote   ("removed")
    X         + Y  → flip to Y         ("changed")

After every transition the item's vote_count is recomputed as SUM(value)
over its vote rows, so a stale counter heals itself on the next vote.
"""

import enum
import logging
import uuid
from typing import Optional, Type, Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import DatabaseError, NotFoundError, ValidationError
from stackit.models.answer import Answer
from stackit.models.question import Question
from stackit.models.user import User
from stackit.models.vote import DOWNVOTE, UPVOTE, AnswerVote, QuestionVote
from stackit.schemas.answer import VoteResponse

logger = logging.getLogger(__name__)

VOTE_VALUES = {"upvote": UPVOTE, "downvote": DOWNVOTE}


class VoteAction(str, enum.Enum):
    ADDED = "added"
    CHANGED = "changed"
    REMOVED = "removed"


def parse_vote_type(vote_type: str) -> int:
    """Map 'upvote'/'downvote' to +1/-1."""
    try:
        return VOTE_VALUES[vote_type]
    except KeyError:
        raise ValidationError(
            message="Invalid vote type",
            field="vote_type",
            context={"allowed": sorted(VOTE_VALUES)},
        )


def resolve_vote(existing: Optional[int], requested: int) -> VoteAction:
    """Pure transition function of the toggle; see the module docstring."""
    if existing is None:
        return VoteAction.ADDED
    if existing == requested:
        return VoteAction.REMOVED
    return VoteAction.CHANGED


class VoteService:
    """Stateless; `vote_service` below is the shared instance."""

    async def vote_question(
        self,
        db: AsyncSession,
        question_id: uuid.UUID,
        user: User,
        vote_type: str,
    ) -> VoteResponse:
        value = parse_vote_type(vote_type)
        question = await db.get(Question, question_id)
        if question is None:
            raise NotFoundError(resource="question", resource_id=str(question_id))

        action = await self._cast(db, question, QuestionVote, "question_id", user, value)
        return self._response(action, question.vote_count, vote_type)

    async def vote_answer(
        self,
        db: AsyncSession,
        answer_id: uuid.UUID,
        user: User,
        vote_type: str,
    ) -> VoteResponse:
        value = parse_vote_type(vote_type)
        answer = await db.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError(resource="answer", resource_id=str(answer_id))

        action = await self._cast(db, answer, AnswerVote, "answer_id", user, value)
        return self._response(action, answer.vote_count, vote_type)

    async def _cast(
        self,
        db: AsyncSession,
        target: Union[Question, Answer],
        vote_model: Type[Union[QuestionVote, AnswerVote]],
        target_column: str,
        user: User,
        value: int,
    ) -> VoteAction:
        """Apply one toggle step to `target` and refresh its vote_count."""
        target_fk = getattr(vote_model, target_column)

        result = await db.execute(
            select(vote_model).where(target_fk == target.id, vote_model.user_id == user.id)
        )
        existing = result.scalar_one_or_none()
        action = resolve_vote(existing.value if existing else None, value)

        if action is VoteAction.ADDED:
            db.add(vote_model(**{target_column: target.id, "user_id": user.id, "value": value}))
        elif action is VoteAction.REMOVED:
            await db.delete(existing)
        else:
            existing.value = value
        try:
            await db.flush()
        except IntegrityError as e:
            # Unique (item, user): a concurrent request voted first
            raise DatabaseError(
                message="Vote could not be recorded. Please try again.",
                context={"target_id": str(target.id), "user_id": str(user.id), "error": type(e).__name__},
            )

        total = await db.execute(
            select(func.coalesce(func.sum(vote_model.value), 0)).where(target_fk == target.id)
        )
        target.vote_count = int(total.scalar_one())
        await db.flush()

        logger.info(
            "Vote %s on %s %s by %s (vote_count=%d)",
            action.value,
            target.__tablename__[:-1],
            target.id,
            user.id,
            target.vote_count,
        )
        return action

    @staticmethod
    def _response(action: VoteAction, vote_count: int, vote_type: str) -> VoteResponse:
        return VoteResponse(
            message=f"Vote {action.value} successfully",
            vote_count=vote_count,
            user_vote=None if action is VoteAction.REMOVED else vote_type,
        )


vote_service = VoteService()
