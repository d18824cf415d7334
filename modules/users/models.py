"""
User moderation data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field

from shared.models import Role


class UserStatus(str, Enum):
    """Moderation state of an account."""

    ACTIVE = "active"
    BAN = "ban"


class ManagedUser(BaseModel):
    """A user as seen by moderators."""

    id: str
    username: Optional[str] = None
    name: Optional[str] = None
    profile_pic: Optional[str] = None
    role: Role = Role.USER
    status: UserStatus = UserStatus.ACTIVE
    introduction: Optional[str] = None
    updated_at: Optional[datetime] = None


class UserComment(BaseModel):
    """A comment in a user's activity history."""

    id: int
    post_id: int
    comment: str
    created_at: Optional[datetime] = None
    blog_posts: Optional[dict[str, Any]] = Field(None, description="Title of the commented post")


class UserLike(BaseModel):
    """A like in a user's activity history."""

    id: int
    post_id: int
    created_at: Optional[datetime] = None
    blog_posts: Optional[dict[str, Any]] = Field(None, description="Title of the liked post")


class UserDetail(BaseModel):
    """A user with recent activity."""

    user: ManagedUser
    comments: list[UserComment] = Field(default_factory=list)
    likes: list[UserLike] = Field(default_factory=list)


class UserListResponse(BaseModel):
    """One page of users, most recently updated first."""

    users: list[ManagedUser]
    page: int
    limit: int


class StatusUpdateRequest(BaseModel):
    """Ban or reinstate a user."""

    status: UserStatus


class UserDeleteResult(BaseModel):
    """Outcome of a cascading user delete."""

    user_id: str
    comments_deleted: int = Field(..., ge=0)
    likes_deleted: int = Field(..., ge=0)
