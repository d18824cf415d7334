"""
Notification service.

Creating notifications is best effort: it never raises, so the comment or
like it is attached to always completes. Administration (listing, marking
read, deleting) runs on an admin data client.
"""

import logging
from typing import Optional

from shared.filters import OrderBy, QueryOptions
from shared.repository import BaseRepository

from .exceptions import NotificationNotFoundError
from .models import Notification, NotificationListResponse, NotificationType

logger = logging.getLogger(__name__)


class NotificationService(BaseRepository[Notification]):
    """Notification creation and administration."""

    async def create_notification(
        self,
        recipient_id: str,
        title: str,
        message: str,
        kind: NotificationType,
        related_post_id: Optional[int] = None,
        related_comment_id: Optional[int] = None,
        related_user_id: Optional[str] = None,
    ) -> Optional[Notification]:
        """
        Create a notification for one recipient.

        Returns:
            The stored notification, or None if it could not be created.
            Never raises.
        """
        try:
            row = await self._db.insert(
                "notifications",
                {
                    "user_id": recipient_id,
                    "title": title,
                    "message": message,
                    "type": kind.value,
                    "is_read": False,
                    "related_post_id": related_post_id,
                    "related_comment_id": related_comment_id,
                    "related_user_id": related_user_id,
                },
            )
            return Notification(**row)
        except Exception:
            logger.exception(f"Failed to create {kind.value} notification for {recipient_id}")
            return None

    async def notify_admins(
        self,
        title: str,
        message: str,
        kind: NotificationType,
        related_post_id: Optional[int] = None,
        related_comment_id: Optional[int] = None,
        related_user_id: Optional[str] = None,
    ) -> list[Notification]:
        """
        Notify every admin. Never raises.

        Returns:
            The notifications that were actually created.
        """
        try:
            admins = await self._db.select("users", "id", {"role": "admin"})
        except Exception:
            logger.exception("Failed to look up admins for notification")
            return []

        created = []
        for admin in admins:
            notification = await self.create_notification(
                str(admin["id"]),
                title,
                message,
                kind,
                related_post_id=related_post_id,
                related_comment_id=related_comment_id,
                related_user_id=related_user_id,
            )
            if notification is not None:
                created.append(notification)
        return created

    async def list_notifications(self, page: int = 1, limit: int = 10) -> NotificationListResponse:
        rows = await self._db.select(
            "notifications",
            "*",
            options=QueryOptions(
                order=OrderBy(column="created_at", ascending=False),
                limit=limit,
                offset=(page - 1) * limit,
            ),
        )
        return NotificationListResponse(
            notifications=[Notification(**row) for row in rows],
            page=page,
            limit=limit,
        )

    async def mark_read(self, notification_id: int) -> Notification:
        row = await self._db.update("notifications", {"is_read": True}, {"id": notification_id})
        if row is None:
            raise NotificationNotFoundError(notification_id)
        return Notification(**row)

    async def delete_notification(self, notification_id: int) -> None:
        deleted = await self._db.delete("notifications", {"id": notification_id})
        if not deleted:
            raise NotificationNotFoundError(notification_id)
