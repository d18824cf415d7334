"""
Posts module exceptions.
"""

from shared.exceptions import NotFoundError


class PostNotFoundError(NotFoundError):
    """Raised when a post is absent or hidden from the caller."""

    def __init__(self, post_id: int):
        super().__init__(
            f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
            details={"post_id": post_id},
        )
