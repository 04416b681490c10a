"""
StackIt Backend — Auth Service
================================

What:  Registration and login. Both return a bearer token plus the account.
How:   Emails are stored lowercased so login is case-insensitive on email;
       usernames keep their case but must be unique as typed.

Login deliberately answers "Invalid credentials" for both an unknown email
and a wrong password.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import AuthenticationError, ValidationError
from stackit.models.user import User
from stackit.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from stackit.security import create_access_token, hash_password, verify_password
from stackit.services.user_service import check_username_allowed, user_service

logger = logging.getLogger(__name__)


class AuthService:

    async def register(self, db: AsyncSession, data: RegisterRequest) -> AuthResponse:
        email = data.email.lower()
        check_username_allowed(data.username)

        existing = await db.execute(
            select(User.id).where(or_(User.email == email, User.username == data.username))
        )
        if existing.first() is not None:
            raise ValidationError(message="User with this email or username already exists")

        user = User(
            username=data.username,
            email=email,
            password_hash=hash_password(data.password),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration
            raise ValidationError(message="User with this email or username already exists")
        logger.info("Registered user %s (%s)", user.username, user.id)

        return AuthResponse(
            message="User registered successfully",
            token=create_access_token(user.id),
            user=UserResponse.model_validate(user),
        )

    async def login(self, db: AsyncSession, data: LoginRequest) -> AuthResponse:
        user = await user_service.find_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("Failed login for %s", data.email)
            raise AuthenticationError(message="Invalid credentials")

        return AuthResponse(
            message="Login successful",
            token=create_access_token(user.id),
            user=UserResponse.model_validate(user),
        )


auth_service = AuthService()
