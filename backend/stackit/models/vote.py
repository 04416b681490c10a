"""
StackIt Backend — Vote SQLAlchemy Models
==========================================

What:  One row per (user, item) vote; one table per votable kind.
Why:   The unique constraint is what guarantees "one vote per user per item";
       VoteService only ever inserts, flips or deletes a single row.

value: +1 for an upvote, -1 for a downvote. An item's vote_count is
SUM(value) over its rows.
"""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, SmallInteger, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin

UPVOTE = 1
DOWNVOTE = -1


class QuestionVote(IdMixin, TimestampMixin, Base):
    __tablename__ = "question_votes"

    question_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("question_id", "user_id", name="uq_question_votes_question_user"),
        CheckConstraint("value IN (1, -1)", name="ck_question_votes_value"),
    )


class AnswerVote(IdMixin, TimestampMixin, Base):
    __tablename__ = "answer_votes"

    answer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("answers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("answer_id", "user_id", name="uq_answer_votes_answer_user"),
        CheckConstraint("value IN (1, -1)", name="ck_answer_votes_value"),
    )
