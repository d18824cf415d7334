"""
Comment API endpoints.
"""

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_client_factory
from api.middleware.auth import get_current_context, get_public_data_client, get_user_data_client
from modules.notifications.service import NotificationService
from shared.database import DataClientFactory
from shared.interfaces import IDataClient
from shared.models import AuthContext

from .models import Comment, CreateCommentRequest, UpdateCommentRequest
from .service import CommentService

router = APIRouter()


async def get_comment_service(
    db: IDataClient = Depends(get_user_data_client),
) -> CommentService:
    """Comment service on the caller's client."""
    return CommentService(db)


@router.get("/{post_id}", response_model=list[Comment])
async def list_comments(
    post_id: int = Path(..., ge=1),
    db: IDataClient = Depends(get_public_data_client),
) -> list[Comment]:
    """
    All comments on a post, oldest first. No authentication required.
    """
    return await CommentService(db).list_for_post(post_id)


@router.post("", response_model=Comment, status_code=201)
async def create_comment(
    request: CreateCommentRequest,
    context: AuthContext = Depends(get_current_context),
    db: IDataClient = Depends(get_user_data_client),
    clients: DataClientFactory = Depends(get_client_factory),
) -> Comment:
    """
    Comment on a post. Admins are notified.
    """
    notifications = NotificationService(await clients.admin("comment notification fan-out"))
    return await CommentService(db, notifications).create_comment(context.user_id, request)


@router.put("/{comment_id}", response_model=Comment)
async def update_comment(
    request: UpdateCommentRequest,
    comment_id: int = Path(..., ge=1),
    context: AuthContext = Depends(get_current_context),
    service: CommentService = Depends(get_comment_service),
) -> Comment:
    """
    Edit one of the caller's own comments.
    """
    return await service.update_comment(comment_id, context.user_id, request.comment)


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: int = Path(..., ge=1),
    context: AuthContext = Depends(get_current_context),
    service: CommentService = Depends(get_comment_service),
) -> None:
    """
    Delete one of the caller's own comments.
    """
    await service.delete_comment(comment_id, context.user_id)
