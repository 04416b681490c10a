"""
StackIt Backend — Authentication Primitives
=============================================

What:  Password hashing, bearer-token signing/verification and the FastAPI
       dependencies that turn an `Authorization` header into a User.
Who:   AuthService (hash, sign) and every authenticated route (dependencies).

Token format:
    HS256 JWT, {"sub": "<user uuid>", "iat": ..., "exp": ...}
    Lifetime: settings.access_token_expire_minutes (24h by default)

Failure modes (all → 401 via AuthenticationError):
    - no Authorization header / not a Bearer scheme
    - bad signature or malformed token
    - expired token
    - token for a user that no longer exists
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.config import settings
from stackit.database import get_db_session
from stackit.exceptions import AuthenticationError, PermissionDeniedError
from stackit.models.user import User

logger = logging.getLogger(__name__)

# pbkdf2_sha256 is pure Python in passlib; no native bcrypt build needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# auto_error=False: a missing header is reported through our own 401 format
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a bearer token whose subject is the user's id."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify a bearer token and return the user id it was issued for.

    Raises:
        AuthenticationError: expired, tampered or malformed token
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(message="Token has expired")
    except jwt.PyJWTError:
        raise AuthenticationError(message="Invalid authentication token")

    subject = payload.get("sub")
    try:
        return uuid.UUID(str(subject))
    except ValueError:
        raise AuthenticationError(message="Invalid authentication token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    FastAPI dependency resolving the caller from `Authorization: Bearer <token>`.

    Shares the request's session with the route (FastAPI caches
    `get_db_session` per request), so the returned User can be attached to
    new questions and answers directly.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="No token provided, authorization denied")

    user_id = decode_access_token(credentials.credentials)
    user = await db.get(User, user_id)
    if user is None:
        logger.warning("Token presented for unknown user %s", user_id)
        raise AuthenticationError(message="User for this token no longer exists")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency for /api/admin routes."""
    if not user.is_admin:
        raise PermissionDeniedError(message="Admin access required")
    return user
