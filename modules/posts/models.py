"""
Posts module data models.
"""

from datetime import datetime
from enum import IntEnum
from typing import Any, Optional
from pydantic import BaseModel, Field


class PostStatus(IntEnum):
    """Publication state, keyed by the statuses table ids."""

    DRAFT = 1
    PUBLISHED = 2


class Post(BaseModel):
    """A blog post."""

    id: int
    title: str
    image: Optional[str] = None
    category_id: Optional[int] = None
    description: Optional[str] = None
    content: Optional[str] = None
    status_id: int = PostStatus.DRAFT
    likes: int = Field(0, ge=0, description="Cached count of post_likes rows")
    date: Optional[datetime] = None
    categories: Optional[dict[str, Any]] = None
    statuses: Optional[dict[str, Any]] = None


class PostRequest(BaseModel):
    """Create or replace a post's editable fields."""

    title: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    category_id: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    status_id: PostStatus = PostStatus.DRAFT


class PostListResponse(BaseModel):
    """One page of published posts."""

    posts: list[Post]
    page: int
    limit: int


class AdminPostListResponse(PostListResponse):
    """One page of posts in any state, with totals for the admin table."""

    total_posts: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PostStats(BaseModel):
    """Dashboard counts."""

    total_posts: int
    published_posts: int
    draft_posts: int
    total_categories: int
    total_users: int
    total_comments: int
