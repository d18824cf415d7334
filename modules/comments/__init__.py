"""
Comments module.
"""

from .exceptions import CommentAccessDeniedError, CommentNotFoundError, EmptyCommentError
from .models import Comment, CreateCommentRequest, UpdateCommentRequest
from .service import CommentService

__all__ = [
    "CommentService",
    "Comment",
    "CreateCommentRequest",
    "UpdateCommentRequest",
    "CommentAccessDeniedError",
    "CommentNotFoundError",
    "EmptyCommentError",
]
