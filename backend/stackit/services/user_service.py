"""
StackIt Backend — User Service
================================

What:  Profiles: the caller's own account, public profiles with stats,
       profile updates and the admin user listing.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import NotFoundError, ValidationError
from stackit.models.answer import Answer
from stackit.models.question import Question
from stackit.models.user import User
from stackit.schemas.user import (
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    PublicProfileResponse,
    PublicUser,
    UserListResponse,
    UserResponse,
    UserStats,
)

logger = logging.getLogger(__name__)

# Would be shadowed by fixed routes under /api/users
RESERVED_USERNAMES = {"profile"}


def check_username_allowed(username: str) -> None:
    if username.lower() in RESERVED_USERNAMES:
        raise ValidationError(message=f"Username '{username}' is reserved", field="username")


class UserService:

    async def get_by_username(self, db: AsyncSession, username: str) -> User:
        result = await db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", resource_id=username)
        return user

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def public_profile(self, db: AsyncSession, username: str) -> PublicProfileResponse:
        """
        Public profile: no email, plus activity stats.

        total_votes is the sum of vote_count over the user's questions and
        answers; downvotes can make it negative.
        """
        user = await self.get_by_username(db, username)

        total_questions = await self._scalar(db, select(func.count(Question.id)).where(Question.author_id == user.id))
        total_answers = await self._scalar(db, select(func.count(Answer.id)).where(Answer.author_id == user.id))
        question_votes = await self._scalar(
            db, select(func.coalesce(func.sum(Question.vote_count), 0)).where(Question.author_id == user.id)
        )
        answer_votes = await self._scalar(
            db, select(func.coalesce(func.sum(Answer.vote_count), 0)).where(Answer.author_id == user.id)
        )

        return PublicProfileResponse(
            user=PublicUser.model_validate(user),
            stats=UserStats(
                total_questions=total_questions,
                total_answers=total_answers,
                total_votes=question_votes + answer_votes,
            ),
        )

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        data: ProfileUpdateRequest,
    ) -> ProfileUpdateResponse:
        """Only fields present in the request are changed."""
        if data.username and data.username != user.username:
            check_username_allowed(data.username)
            taken = await db.execute(select(User.id).where(User.username == data.username))
            if taken.scalar_one_or_none() is not None:
                raise ValidationError(message="Username already taken", field="username")
            user.username = data.username

        if data.bio is not None:
            user.bio = data.bio
        if data.avatar is not None:
            user.avatar = data.avatar or None

        await db.flush()
        logger.info("Profile updated for %s", user.id)
        return ProfileUpdateResponse(user=UserResponse.model_validate(user))

    async def list_users(self, db: AsyncSession) -> UserListResponse:
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return UserListResponse(users=[UserResponse.model_validate(u) for u in result.scalars().all()])

    @staticmethod
    async def _scalar(db: AsyncSession, query) -> int:
        result = await db.execute(query)
        return int(result.scalar() or 0)


user_service = UserService()
