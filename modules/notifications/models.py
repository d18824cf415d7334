"""
Notifications module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """What triggered a notification."""

    COMMENT = "comment"
    LIKE = "like"
    POST = "post"


class Notification(BaseModel):
    """A notification addressed to a single recipient."""

    id: int
    user_id: str = Field(..., description="Recipient user ID")
    title: str
    message: str
    type: NotificationType
    is_read: bool = False
    related_post_id: Optional[int] = None
    related_comment_id: Optional[int] = None
    related_user_id: Optional[str] = None
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    """One page of notifications, newest first."""

    notifications: list[Notification]
    page: int
    limit: int
