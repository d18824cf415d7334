"""
User moderation service.

Every operation here acts on rows owned by other users, so it runs on an
admin data client. Deleting a user also removes their likes; the like
counters of the affected posts are recomputed afterwards.
"""

import logging
from datetime import datetime, timezone

from shared.exceptions import BlogError
from shared.filters import OrderBy, QueryOptions
from shared.repository import BaseRepository

from modules.comments.exceptions import CommentNotFoundError
from modules.likes.service import LikeService

from .exceptions import SelfModerationError, UserNotFoundError
from .models import (
    ManagedUser,
    UserComment,
    UserDeleteResult,
    UserDetail,
    UserLike,
    UserListResponse,
    UserStatus,
)

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, username, name, profile_pic, role, status, updated_at, introduction"


class UserModerationService(BaseRepository[ManagedUser]):
    """Admin-only user management."""

    async def list_users(self, page: int = 1, limit: int = 10) -> UserListResponse:
        rows = await self._db.select(
            "users",
            USER_COLUMNS,
            options=QueryOptions(
                order=OrderBy(column="updated_at", ascending=False),
                limit=limit,
                offset=(page - 1) * limit,
            ),
        )
        return UserListResponse(users=[ManagedUser(**row) for row in rows], page=page, limit=limit)

    async def get_user(self, user_id: str, activity_limit: int = 10) -> UserDetail:
        user = await self._get(user_id)
        recent = QueryOptions(order=OrderBy(column="created_at", ascending=False), limit=activity_limit)

        comments = await self._db.select(
            "comments", "id, comment, created_at, post_id, blog_posts(title)", {"user_id": user_id}, recent
        )
        likes = await self._db.select(
            "post_likes", "id, created_at, post_id, blog_posts(title)", {"user_id": user_id}, recent
        )
        return UserDetail(
            user=user,
            comments=[UserComment(**row) for row in comments],
            likes=[UserLike(**row) for row in likes],
        )

    async def set_status(self, user_id: str, status: UserStatus, acting_admin_id: str) -> ManagedUser:
        if user_id == acting_admin_id:
            raise SelfModerationError(user_id)

        row = await self._db.update(
            "users",
            {"status": status.value, "updated_at": datetime.now(timezone.utc).isoformat()},
            {"id": user_id},
        )
        if row is None:
            raise UserNotFoundError(user_id)
        logger.info(f"User {user_id} status set to {status.value} by {acting_admin_id}")
        return ManagedUser(**row)

    async def delete_user(self, user_id: str, acting_admin_id: str) -> UserDeleteResult:
        if user_id == acting_admin_id:
            raise SelfModerationError(user_id)
        await self._get(user_id)

        comments = await self._db.delete("comments", {"user_id": user_id})
        likes = await self._db.delete("post_likes", {"user_id": user_id})
        await self._db.delete("users", {"id": user_id})

        liked_posts = sorted({row["post_id"] for row in likes if row.get("post_id") is not None})
        counters = LikeService(self._db)
        for post_id in liked_posts:
            try:
                await counters.reconcile(post_id)
            except BlogError:
                logger.exception(f"Like counter reconcile failed for post {post_id}")

        logger.info(
            f"Deleted user {user_id} ({len(comments)} comments, {len(likes)} likes) by {acting_admin_id}"
        )
        return UserDeleteResult(user_id=user_id, comments_deleted=len(comments), likes_deleted=len(likes))

    async def delete_user_comment(self, user_id: str, comment_id: int) -> None:
        deleted = await self._db.delete("comments", {"id": comment_id, "user_id": user_id})
        if not deleted:
            raise CommentNotFoundError(comment_id)

    async def _get(self, user_id: str) -> ManagedUser:
        rows = await self._db.select("users", USER_COLUMNS, {"id": user_id})
        if not rows:
            raise UserNotFoundError(user_id)
        return ManagedUser(**rows[0])
