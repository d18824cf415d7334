"""
Posts module.
"""

from .exceptions import PostNotFoundError
from .models import AdminPostListResponse, Post, PostListResponse, PostRequest, PostStats, PostStatus
from .service import PostService

__all__ = [
    "PostService",
    "AdminPostListResponse",
    "Post",
    "PostListResponse",
    "PostRequest",
    "PostStats",
    "PostStatus",
    "PostNotFoundError",
]
