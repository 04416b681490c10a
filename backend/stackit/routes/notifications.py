"""
StackIt Backend — Notification Route Handlers
===============================================

What:  /api/notifications — the caller's inbox.
Who:   The SPA's notification bell.

/read-all is declared before /{notification_id}/read; the shapes differ
anyway, but keeping fixed paths first mirrors the other routers.
"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.models.user import User
from stackit.schemas.common import ErrorResponse, MessageResponse
from stackit.schemas.notification import NotificationListResponse
from stackit.security import get_current_user
from stackit.services.notification_service import notification_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])

OWNERSHIP_ERRORS = {
    403: {"description": "Not the recipient", "model": ErrorResponse},
    404: {"description": "Notification not found", "model": ErrorResponse},
}


@router.get("", response_model=NotificationListResponse, summary="The caller's notifications, newest first")
async def list_notifications(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NotificationListResponse:
    return await notification_service.list_notifications(db, user, page=page, limit=limit)


@router.put("/read-all", response_model=MessageResponse, summary="Mark every notification as read")
async def mark_all_read(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await notification_service.mark_all_read(db, user)


@router.put(
    "/{notification_id}/read",
    response_model=MessageResponse,
    responses=OWNERSHIP_ERRORS,
    summary="Mark one notification as read",
)
async def mark_read(
    notification_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await notification_service.mark_read(db, user, notification_id)


@router.delete(
    "/{notification_id}",
    response_model=MessageResponse,
    responses=OWNERSHIP_ERRORS,
    summary="Delete one notification",
)
async def delete_notification(
    notification_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await notification_service.delete(db, user, notification_id)
