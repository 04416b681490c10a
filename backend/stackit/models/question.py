"""
StackIt Backend — Question SQLAlchemy Model
=============================================

What:  ORM model representing the `questions` table.
Who:   Owned by QuestionService; counters are touched by AnswerService and
       VoteService as well.

Denormalized counters:
    - vote_count:   recomputed from question_votes after every vote
    - answer_count: +1 on answer creation, -1 on answer deletion
    - views:        +1 every time the detail endpoint is hit

accepted_answer_id:
    Plain column, no foreign key. questions → answers → questions would be
    a cycle; AnswerService clears the reference when the answer goes away.

Query Patterns:
    - List newest: ORDER BY created_at DESC → idx_questions_created_at
    - My questions: WHERE author_id = :uid → idx_questions_author_id
"""

import uuid
from typing import List

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin
from stackit.models.tag import Tag, question_tags
from stackit.models.user import User


class Question(IdMixin, TimestampMixin, Base):
    __tablename__ = "questions"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    accepted_answer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        nullable=True,
        default=None,
    )

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))
    answer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))

    # selectin: loaded with the query itself, never lazily inside async code
    author: Mapped[User] = relationship(lazy="selectin")
    tags: Mapped[List[Tag]] = relationship(secondary=question_tags, lazy="selectin")

    __table_args__ = (
        Index("idx_questions_created_at", "created_at"),
        Index("idx_questions_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title='{self.title[:30]}', votes={self.vote_count})>"
