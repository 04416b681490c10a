"""
StackIt Backend — Answer SQLAlchemy Model
===========================================

What:  ORM model representing the `answers` table.

is_accepted mirrors Question.accepted_answer_id: AnswerService flips both
in the same transaction, so at most one answer per question carries the flag.
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin
from stackit.models.question import Question
from stackit.models.user import User


class Answer(IdMixin, TimestampMixin, Base):
    __tablename__ = "answers"

    question_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))
    is_accepted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    author: Mapped[User] = relationship(lazy="selectin")
    # Only needed for "my answers" style listings; load explicitly with selectinload()
    question: Mapped[Question] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_answers_question_id", "question_id"),
        Index("idx_answers_author_id", "author_id"),
        Index("idx_answers_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, question_id={self.question_id}, accepted={self.is_accepted})>"
