"""
StackIt Backend — Application Package Initializer
==================================================

What: Marks the `stackit` directory as a Python package.
Why:  Enables module imports like `from stackit.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered the same way for every resource
    (questions, answers, users, tags, notifications):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Business Rules)        │  ← permissions, counters, votes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch counters directly; every denormalized field
    (vote_count, answer_count, question_count) is maintained in a service.
"""

__version__ = "1.0.0"
