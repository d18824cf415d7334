"""
Notifications module.

Best-effort notifications for comments and likes, plus admin
administration of the stored notifications.
"""

from .exceptions import NotificationNotFoundError
from .models import Notification, NotificationListResponse, NotificationType
from .service import NotificationService

__all__ = [
    "NotificationService",
    "Notification",
    "NotificationListResponse",
    "NotificationType",
    "NotificationNotFoundError",
]
