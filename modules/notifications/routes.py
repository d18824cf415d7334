"""
Notification administration endpoints (admin only).
"""

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_client_factory
from api.middleware.auth import require_admin
from shared.database import DataClientFactory
from shared.models import AuthContext

from .models import Notification, NotificationListResponse
from .service import NotificationService

router = APIRouter()


async def get_notification_service(
    context: AuthContext = Depends(require_admin),
    clients: DataClientFactory = Depends(get_client_factory),
) -> NotificationService:
    return NotificationService(await clients.admin(f"notification moderation by {context.user_id}"))


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """
    Notifications, newest first.
    """
    return await service.list_notifications(page, limit)


@router.put("/{notification_id}/read", response_model=Notification)
async def mark_notification_read(
    notification_id: int = Path(..., ge=1),
    service: NotificationService = Depends(get_notification_service),
) -> Notification:
    return await service.mark_read(notification_id)


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: int = Path(..., ge=1),
    service: NotificationService = Depends(get_notification_service),
) -> None:
    await service.delete_notification(notification_id)
