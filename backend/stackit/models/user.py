"""
StackIt Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Created by AuthService.register; read by the bearer-token dependency
       and by every service that needs an author.

Table Design Rationale:
    - username and email are both unique: login is by email, public
      profile URLs are by username
    - password_hash only: plain passwords never touch the database
    - role: 'user' or 'admin'; admins may delete any question or answer
    - reputation: stored for display, no subsystem computes it
"""

from sqlalchemy import Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(IdMixin, TimestampMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        unique=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_USER,
        server_default=text(f"'{ROLE_USER}'"),
    )
    reputation: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    bio: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    # URL of an externally hosted image
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
