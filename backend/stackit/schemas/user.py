"""
StackIt Backend — User & Auth Schemas
=======================================

Three views of a user, from most to least private:

    UserResponse     the caller's own account (email, role included)
    PublicUser       someone else's profile page (no email)
    UserSummary      embedded next to every question, answer and notification
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(BaseModel):
    id: uuid.UUID
    username: str
    avatar: Optional[str] = None
    reputation: int = 0

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    role: str
    reputation: int
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicUser(BaseModel):
    id: uuid.UUID
    username: str
    role: str
    reputation: int
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserStats(BaseModel):
    total_questions: int
    total_answers: int
    total_votes: int = Field(description="Sum of vote counts over the user's questions and answers")


class PublicProfileResponse(BaseModel):
    user: PublicUser
    stats: UserStats


class ProfileResponse(BaseModel):
    user: UserResponse


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile updated successfully"
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class AuthResponse(BaseModel):
    """
    Returned by register and login.

    The SPA stores `token` and sends it back as `Authorization: Bearer <token>`.
    """
    message: str
    token: str
    user: UserResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_identity(cls, v):
        # The password is hashed exactly as typed, as login compares it
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class ProfileUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""
    username: Optional[str] = Field(default=None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    bio: Optional[str] = Field(default=None, max_length=1000)
    avatar: Optional[str] = Field(default=None, max_length=500)

    model_config = {"str_strip_whitespace": True}
