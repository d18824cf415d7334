"""
User moderation module (admin only).
"""

from .exceptions import SelfModerationError, UserNotFoundError
from .models import ManagedUser, StatusUpdateRequest, UserDetail, UserListResponse, UserStatus
from .service import UserModerationService

__all__ = [
    "UserModerationService",
    "ManagedUser",
    "StatusUpdateRequest",
    "UserDetail",
    "UserListResponse",
    "UserStatus",
    "SelfModerationError",
    "UserNotFoundError",
]
