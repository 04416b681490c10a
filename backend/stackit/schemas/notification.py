import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from stackit.schemas.common import Pagination


class NotificationActor(BaseModel):
    id: uuid.UUID
    username: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class NotificationResponse(BaseModel):
    id: uuid.UUID
    type: str
    entity_id: uuid.UUID
    entity_type: str
    message: str
    is_read: bool
    actor: NotificationActor
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    pagination: Pagination
    unread_count: int = Field(description="Unread notifications across all pages")
