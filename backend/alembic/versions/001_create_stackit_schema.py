"""Create StackIt schema

Revision ID: 001
Revises: None
Create Date: 2025-07-12 00:00:00.000000+00:00

What:  Creates users, tags, questions, question_tags, answers, the two vote
       tables and notifications.
How:   UUID primary keys are generated by the application (uuid4), so no
       database extension is required. Timestamps are TIMESTAMP WITH TIME ZONE.

Rollback: downgrade() drops every table in reverse dependency order
(destructive — all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _counter(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), nullable=False, server_default=sa.text("0"))


def upgrade() -> None:
    # ── users ─────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        _counter("reputation"),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # ── tags ──────────────────────────────────────────────────────────────
    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("color", sa.String(20), nullable=False, server_default=sa.text("'#3B82F6'")),
        _counter("question_count"),
        *_timestamps(),
    )
    op.create_index("ix_tags_name", "tags", ["name"], unique=True)

    # ── questions ─────────────────────────────────────────────────────────
    op.create_table(
        "questions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        # No FK: answers reference questions, the reverse would be a cycle
        sa.Column("accepted_answer_id", sa.Uuid(), nullable=True),
        _counter("views"),
        _counter("vote_count"),
        _counter("answer_count"),
        *_timestamps(),
    )
    op.create_index("idx_questions_created_at", "questions", ["created_at"])
    op.create_index("idx_questions_author_id", "questions", ["author_id"])

    op.create_table(
        "question_tags",
        sa.Column("question_id", sa.Uuid(), sa.ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.Uuid(), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    )

    # ── answers ───────────────────────────────────────────────────────────
    op.create_table(
        "answers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("question_id", sa.Uuid(), sa.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _counter("vote_count"),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("idx_answers_question_id", "answers", ["question_id"])
    op.create_index("idx_answers_author_id", "answers", ["author_id"])
    op.create_index("idx_answers_created_at", "answers", ["created_at"])

    # ── votes ─────────────────────────────────────────────────────────────
    op.create_table(
        "question_votes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("question_id", sa.Uuid(), sa.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("question_id", "user_id", name="uq_question_votes_question_user"),
        sa.CheckConstraint("value IN (1, -1)", name="ck_question_votes_value"),
    )
    op.create_index("ix_question_votes_question_id", "question_votes", ["question_id"])

    op.create_table(
        "answer_votes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("answer_id", sa.Uuid(), sa.ForeignKey("answers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("answer_id", "user_id", name="uq_answer_votes_answer_user"),
        sa.CheckConstraint("value IN (1, -1)", name="ck_answer_votes_value"),
    )
    op.create_index("ix_answer_votes_answer_id", "answer_votes", ["answer_id"])

    # ── notifications ─────────────────────────────────────────────────────
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("recipient_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("actor_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("idx_notifications_recipient_read", "notifications", ["recipient_id", "is_read"])
    op.create_index("idx_notifications_created_at", "notifications", ["created_at"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("answer_votes")
    op.drop_table("question_votes")
    op.drop_table("answers")
    op.drop_table("question_tags")
    op.drop_table("questions")
    op.drop_table("tags")
    op.drop_table("users")
