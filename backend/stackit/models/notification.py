"""
StackIt Backend — Notification SQLAlchemy Model
=================================================

What:  ORM model for the `notifications` table.
Who:   Written by AnswerService (new answer, accepted answer); read and
       updated by NotificationService on behalf of the recipient.

entity_id / entity_type point at the question or answer the notification
is about. There is no foreign key because the target table varies;
QuestionService removes notifications for content it deletes.
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import IdMixin, TimestampMixin
from stackit.models.user import User

NOTIFICATION_TYPES = ("answer", "comment", "mention", "accept", "vote")
ENTITY_TYPES = ("question", "answer")


class Notification(IdMixin, TimestampMixin, Base):
    __tablename__ = "notifications"

    recipient_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    actor_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    actor: Mapped[User] = relationship(foreign_keys=[actor_id], lazy="selectin")

    __table_args__ = (
        # "my unread notifications" is the hot path
        Index("idx_notifications_recipient_read", "recipient_id", "is_read"),
        Index("idx_notifications_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification(type='{self.type}', recipient={self.recipient_id}, read={self.is_read})>"
