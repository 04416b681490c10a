"""
StackIt Backend — Tag SQLAlchemy Model
========================================

What:  ORM model for the `tags` table and the `question_tags` association table.
Why:   Tags are shared across questions; `question_count` is a denormalized
       counter kept in step by TagService so the tag list never has to
       COUNT(*) the association table.

Invariants (maintained by TagService, not by the database):
    - name is lowercase and trimmed before it is stored
    - question_count never drops below zero
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin

DEFAULT_TAG_COLOR = "#3B82F6"

question_tags = Table(
    "question_tags",
    Base.metadata,
    Column("question_id", ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(IdMixin, TimestampMixin, Base):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    color: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_TAG_COLOR,
        server_default=text(f"'{DEFAULT_TAG_COLOR}'"),
    )
    question_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}', question_count={self.question_count})>"
