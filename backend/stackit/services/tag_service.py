"""
StackIt Backend — Tag Service
===============================

What:  Find-or-create for tag names and the question_count bookkeeping.
Who:   QuestionService (create, update, delete) and GET /api/tags.

Counter rules:
    attach_tags()   +1 for every tag a question starts referencing
    release_tags()  -1 for every tag a question stops referencing, floored at 0
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.models.tag import Tag
from stackit.schemas.tag import TagListResponse, TagResponse

logger = logging.getLogger(__name__)


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """
    Lowercase, trim and de-duplicate tag names, keeping first-seen order.

    Example:
        ["Python", " python ", "FastAPI", ""] → ["python", "fastapi"]
    """
    seen = []
    for name in names:
        cleaned = name.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def escape_like(text: str) -> str:
    """Make `%`, `_` and `\\` match literally inside a LIKE pattern."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TagService:

    async def attach_tags(self, db: AsyncSession, names: Iterable[str]) -> List[Tag]:
        """Return Tag rows for `names`, creating missing ones, and count one more use of each."""
        wanted = normalize_tag_names(names)
        if not wanted:
            return []

        result = await db.execute(select(Tag).where(Tag.name.in_(wanted)))
        existing = {tag.name: tag for tag in result.scalars().all()}

        tags = []
        for name in wanted:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name, question_count=0)
                db.add(tag)
                logger.info("Created tag '%s'", name)
            tag.question_count += 1
            tags.append(tag)

        await db.flush()
        return tags

    async def release_tags(self, db: AsyncSession, tags: Iterable[Tag]) -> None:
        for tag in tags:
            tag.question_count = max(0, tag.question_count - 1)
        await db.flush()

    async def list_tags(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        limit: int = 50,
    ) -> TagListResponse:
        """Most used tags first; `search` is a case-insensitive name prefix."""
        query = select(Tag)
        if search:
            query = query.where(Tag.name.like(f"{escape_like(search.strip().lower())}%", escape="\\"))
        query = query.order_by(Tag.question_count.desc(), Tag.name.asc()).limit(limit)

        result = await db.execute(query)
        return TagListResponse(
            tags=[TagResponse.model_validate(tag) for tag in result.scalars().all()]
        )


tag_service = TagService()
