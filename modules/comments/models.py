"""
Comments module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Comment(BaseModel):
    """A comment on a blog post."""

    id: int
    post_id: int
    user_id: Optional[str] = None
    parent_id: Optional[int] = None
    name: Optional[str] = Field(None, description="Author display name at posting time")
    email: Optional[str] = None
    comment: str
    image: Optional[str] = Field(None, description="Author avatar at posting time")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateCommentRequest(BaseModel):
    """Request to comment on a post."""

    post_id: int = Field(..., ge=1)
    parent_id: Optional[int] = Field(None, ge=1, description="Comment being replied to")
    comment: str = Field(..., min_length=1, max_length=5000)


class UpdateCommentRequest(BaseModel):
    """Request to edit a comment."""

    comment: str = Field(..., min_length=1, max_length=5000)
