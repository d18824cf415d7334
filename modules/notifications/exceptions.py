"""
Notifications module exceptions.
"""

from shared.exceptions import NotFoundError


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification does not exist."""

    def __init__(self, notification_id: int):
        super().__init__(
            f"Notification not found: {notification_id}",
            code="NOTIFICATION_NOT_FOUND",
            details={"notification_id": notification_id},
        )
