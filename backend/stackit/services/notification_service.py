"""
StackIt Backend — Notification Service
========================================

What:  Creates notifications on behalf of other services and lets the
       recipient list, read and delete them.

Ownership rule:
    Only the recipient may mark a notification read or delete it;
    anyone else gets 403 (404 when the id does not exist at all).
"""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import NotFoundError, PermissionDeniedError
from stackit.models.notification import Notification
from stackit.models.user import User
from stackit.schemas.common import MessageResponse
from stackit.schemas.notification import NotificationListResponse, NotificationResponse
from stackit.services.pagination import build_pagination, page_offset

logger = logging.getLogger(__name__)


class NotificationService:

    async def notify(
        self,
        db: AsyncSession,
        recipient_id: uuid.UUID,
        actor: User,
        type: str,
        entity_id: uuid.UUID,
        entity_type: str,
        message: str,
    ) -> None:
        """Queue a notification for `recipient_id`; self-notifications are dropped."""
        if recipient_id == actor.id:
            return
        db.add(
            Notification(
                recipient_id=recipient_id,
                actor_id=actor.id,
                actor=actor,
                type=type,
                entity_id=entity_id,
                entity_type=entity_type,
                message=message,
            )
        )
        await db.flush()
        logger.info("Notification '%s' for %s about %s %s", type, recipient_id, entity_type, entity_id)

    async def list_notifications(
        self,
        db: AsyncSession,
        user: User,
        page: int = 1,
        limit: int = 20,
    ) -> NotificationListResponse:
        mine = Notification.recipient_id == user.id

        result = await db.execute(
            select(Notification)
            .where(mine)
            .order_by(Notification.created_at.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        notifications = result.scalars().all()

        total = (await db.execute(select(func.count(Notification.id)).where(mine))).scalar() or 0
        unread = (
            await db.execute(
                select(func.count(Notification.id)).where(mine, Notification.is_read.is_(False))
            )
        ).scalar() or 0

        return NotificationListResponse(
            notifications=[NotificationResponse.model_validate(n) for n in notifications],
            pagination=build_pagination(page, limit, total),
            unread_count=unread,
        )

    async def mark_read(self, db: AsyncSession, user: User, notification_id: uuid.UUID) -> MessageResponse:
        notification = await self._get_owned(
            db, user, notification_id, "You can only mark your own notifications as read"
        )
        notification.is_read = True
        await db.flush()
        return MessageResponse(message="Notification marked as read")

    async def mark_all_read(self, db: AsyncSession, user: User) -> MessageResponse:
        result = await db.execute(
            update(Notification)
            .where(Notification.recipient_id == user.id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        logger.info("Marked %d notifications read for %s", result.rowcount, user.id)
        return MessageResponse(message="All notifications marked as read")

    async def delete(self, db: AsyncSession, user: User, notification_id: uuid.UUID) -> MessageResponse:
        notification = await self._get_owned(
            db, user, notification_id, "You can only delete your own notifications"
        )
        await db.delete(notification)
        await db.flush()
        return MessageResponse(message="Notification deleted successfully")

    async def _get_owned(
        self,
        db: AsyncSession,
        user: User,
        notification_id: uuid.UUID,
        denied_message: str,
    ) -> Notification:
        notification = await db.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError(resource="notification", resource_id=str(notification_id))
        if notification.recipient_id != user.id:
            raise PermissionDeniedError(message=denied_message)
        return notification


notification_service = NotificationService()
