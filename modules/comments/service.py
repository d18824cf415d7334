"""
Comment service.

Comments are written through the author's scoped client, so row-level
policy has the final say; the ownership check here only turns a
policy-hidden write into a clear error before it is attempted.
"""

from datetime import datetime, timezone
from typing import Optional

from shared.filters import OrderBy, QueryOptions
from shared.repository import BaseRepository

from modules.auth.exceptions import ProfileNotFoundError
from modules.notifications.models import NotificationType
from modules.notifications.service import NotificationService

from .exceptions import CommentAccessDeniedError, CommentNotFoundError, EmptyCommentError
from .models import Comment, CreateCommentRequest


class CommentService(BaseRepository[Comment]):
    """Comment CRUD for a single request's data client."""

    def __init__(self, db, notifications: Optional[NotificationService] = None) -> None:
        super().__init__(db)
        self._notifications = notifications

    async def list_for_post(self, post_id: int) -> list[Comment]:
        rows = await self._db.select(
            "comments",
            "*",
            {"post_id": post_id},
            QueryOptions(order=OrderBy(column="created_at", ascending=True)),
        )
        return [Comment(**row) for row in rows]

    async def create_comment(self, user_id: str, request: CreateCommentRequest) -> Comment:
        text = request.comment.strip()
        if not text:
            raise EmptyCommentError()

        users = await self._db.select("users", "name, username, profile_pic", {"id": user_id})
        if not users:
            raise ProfileNotFoundError(user_id)
        author = users[0]
        display_name = author.get("name") or author.get("username") or "Anonymous"

        row = await self._db.insert(
            "comments",
            {
                "post_id": request.post_id,
                "user_id": user_id,
                "parent_id": request.parent_id,
                "name": display_name,
                "email": None,
                "comment": text,
                "image": author.get("profile_pic"),
            },
        )
        comment = Comment(**row)

        if self._notifications is not None:
            await self._notifications.notify_admins(
                "New Comment",
                f'{display_name} commented on post: "{text}"',
                NotificationType.COMMENT,
                related_post_id=request.post_id,
                related_comment_id=comment.id,
                related_user_id=user_id,
            )

        return comment

    async def update_comment(self, comment_id: int, user_id: str, text: str) -> Comment:
        text = text.strip()
        if not text:
            raise EmptyCommentError()

        await self._get_owned(comment_id, user_id)
        row = await self._db.update(
            "comments",
            {"comment": text, "updated_at": datetime.now(timezone.utc).isoformat()},
            {"id": comment_id, "user_id": user_id},
        )
        if row is None:
            raise CommentNotFoundError(comment_id)
        return Comment(**row)

    async def delete_comment(self, comment_id: int, user_id: str) -> None:
        await self._get_owned(comment_id, user_id)
        deleted = await self._db.delete("comments", {"id": comment_id, "user_id": user_id})
        if not deleted:
            raise CommentNotFoundError(comment_id)

    async def _get_owned(self, comment_id: int, user_id: str) -> dict:
        rows = await self._db.select("comments", "id, user_id", {"id": comment_id})
        if not rows:
            raise CommentNotFoundError(comment_id)
        if str(rows[0].get("user_id")) != user_id:
            raise CommentAccessDeniedError(comment_id, user_id)
        return rows[0]
