"""
Like API endpoints.
"""

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_client_factory
from api.middleware.auth import (
    get_current_context,
    get_public_data_client,
    get_user_data_client,
    require_admin,
)
from modules.notifications.service import NotificationService
from shared.database import DataClientFactory
from shared.interfaces import IDataClient
from shared.models import AuthContext

from .models import LikeCount, LikeStatus, ReconcileResult, ToggleResponse
from .service import LikeService

router = APIRouter()


async def get_like_service(
    db: IDataClient = Depends(get_user_data_client),
    clients: DataClientFactory = Depends(get_client_factory),
) -> LikeService:
    """Like service on the caller's client; notifications fan out to other users."""
    notifications = NotificationService(await clients.admin("like notification fan-out"))
    return LikeService(db, notifications)


@router.post("/{post_id}", response_model=ToggleResponse)
async def toggle_like(
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(get_current_context),
    service: LikeService = Depends(get_like_service),
) -> ToggleResponse:
    """
    Toggle the caller's like on a post.
    """
    result = await service.toggle(post_id, context.user_id)
    return ToggleResponse(
        message="Post liked successfully" if result.is_liked else "Post unliked successfully",
        is_liked=result.is_liked,
        like_count=result.like_count,
    )


@router.get("/{post_id}", response_model=LikeStatus)
async def get_like_status(
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(get_current_context),
    db: IDataClient = Depends(get_user_data_client),
) -> LikeStatus:
    """
    Whether the caller likes a post, plus its like count.
    """
    return await LikeService(db).get_status(post_id, context.user_id)


@router.get("/{post_id}/public", response_model=LikeCount)
async def get_public_like_count(
    post_id: int = Path(..., ge=1),
    db: IDataClient = Depends(get_public_data_client),
) -> LikeCount:
    """
    Like count for a post. No authentication required.
    """
    return await LikeService(db).get_public_count(post_id)


@router.post("/{post_id}/reconcile", response_model=ReconcileResult)
async def reconcile_like_count(
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    clients: DataClientFactory = Depends(get_client_factory),
) -> ReconcileResult:
    """
    Recompute a post's like counter from its membership rows (admin only).
    """
    db = await clients.admin(f"like counter reconcile for post {post_id} by {context.user_id}")
    return await LikeService(db).reconcile(post_id)
