"""
User moderation endpoints (admin only).
"""

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_client_factory
from api.middleware.auth import require_admin
from shared.database import DataClientFactory
from shared.models import AuthContext

from .models import ManagedUser, StatusUpdateRequest, UserDeleteResult, UserDetail, UserListResponse
from .service import UserModerationService

router = APIRouter()


async def get_moderation_service(
    context: AuthContext = Depends(require_admin),
    clients: DataClientFactory = Depends(get_client_factory),
) -> UserModerationService:
    """Moderation service on an admin client, opened only after the role gate."""
    return UserModerationService(await clients.admin(f"user moderation by {context.user_id}"))


@router.get("", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: UserModerationService = Depends(get_moderation_service),
) -> UserListResponse:
    return await service.list_users(page, limit)


@router.get("/{user_id}", response_model=UserDetail)
async def get_user(
    user_id: str = Path(...),
    service: UserModerationService = Depends(get_moderation_service),
) -> UserDetail:
    """
    A user with their most recent comments and likes.
    """
    return await service.get_user(user_id)


@router.patch("/{user_id}/status", response_model=ManagedUser)
async def update_user_status(
    request: StatusUpdateRequest,
    user_id: str = Path(...),
    context: AuthContext = Depends(require_admin),
    service: UserModerationService = Depends(get_moderation_service),
) -> ManagedUser:
    """
    Ban or reinstate a user.
    """
    return await service.set_status(user_id, request.status, context.user_id)


@router.delete("/{user_id}", response_model=UserDeleteResult)
async def delete_user(
    user_id: str = Path(...),
    context: AuthContext = Depends(require_admin),
    service: UserModerationService = Depends(get_moderation_service),
) -> UserDeleteResult:
    """
    Delete a user with their comments and likes.
    """
    return await service.delete_user(user_id, context.user_id)


@router.delete("/{user_id}/comments/{comment_id}", status_code=204)
async def delete_user_comment(
    user_id: str = Path(...),
    comment_id: int = Path(..., ge=1),
    service: UserModerationService = Depends(get_moderation_service),
) -> None:
    """
    Remove one of a user's comments.
    """
    await service.delete_user_comment(user_id, comment_id)
