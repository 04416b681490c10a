"""
StackIt Backend — ORM Models
==============================

Importing this package registers every table with `Base.metadata`.
Alembic's env.py and the test-suite's `create_all` both rely on that.
"""

from stackit.models.user import User
from stackit.models.tag import Tag, question_tags
from stackit.models.question import Question
from stackit.models.answer import Answer
from stackit.models.vote import QuestionVote, AnswerVote
from stackit.models.notification import Notification

__all__ = [
    "User",
    "Tag",
    "question_tags",
    "Question",
    "Answer",
    "QuestionVote",
    "AnswerVote",
    "Notification",
]
