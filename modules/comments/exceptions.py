"""
Comments module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class CommentNotFoundError(NotFoundError):
    """Raised when a comment is not found."""

    def __init__(self, comment_id: int):
        super().__init__(
            f"Comment not found: {comment_id}",
            code="COMMENT_NOT_FOUND",
            details={"comment_id": comment_id},
        )


class CommentAccessDeniedError(AuthorizationError):
    """Raised when a user edits or deletes someone else's comment."""

    def __init__(self, comment_id: int, user_id: str):
        super().__init__(
            "You can only modify your own comments",
            code="COMMENT_ACCESS_DENIED",
            details={"comment_id": comment_id, "user_id": user_id},
        )


class EmptyCommentError(ValidationError):
    """Raised when a comment is blank after trimming."""

    def __init__(self):
        super().__init__("Comment content is required", code="EMPTY_COMMENT")
