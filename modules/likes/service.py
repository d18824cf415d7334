"""
Like toggling and the denormalized like counter.

The post_likes membership rows are the source of truth for "does user U
like post P"; blog_posts.likes is a cached count of them. The membership
write always happens first, then the counter is recomputed store-side by
the refresh_post_like_count function (migrations/001). The function locks
the post row and counts membership in one call, so concurrent toggles by
different users cannot lose an update, and it writes blog_posts with
definer rights, so the caller needs no update permission on posts.

If the refresh fails, the toggle still succeeds and reconcile() repairs
the counter later.
"""

import logging
from typing import Optional

from shared.exceptions import BlogError, DuplicateRowError
from shared.repository import BaseRepository

from modules.notifications.models import NotificationType
from modules.notifications.service import NotificationService
from modules.posts.exceptions import PostNotFoundError

from .exceptions import ReconcileRequiresAdminError
from .models import LikeCount, LikeState, LikeStatus, ReconcileResult, ToggleResult

logger = logging.getLogger(__name__)

LIKE_COUNTER_FUNCTION = "refresh_post_like_count"


class LikeService(BaseRepository[ToggleResult]):
    """
    Like/unlike state machine over (post_id, user_id).

    Runs on whatever data client it is given: the caller's scoped client
    for toggles and status, an anonymous client for public counts, and an
    admin client for reconciliation.
    """

    def __init__(self, db, notifications: Optional[NotificationService] = None) -> None:
        super().__init__(db)
        self._notifications = notifications

    async def toggle(self, post_id: int, user_id: str) -> ToggleResult:
        """
        Like the post if the user does not like it yet, otherwise unlike it.

        Raises:
            PostNotFoundError: If the post is not visible to the caller.
                Nothing is written in that case.
        """
        current = await self._get_counter(post_id)
        membership = {"post_id": post_id, "user_id": user_id}
        created = False

        existing = await self._db.select("post_likes", "id", membership)
        if existing:
            # Zero rows deleted means a concurrent unlike got there first
            await self._db.delete("post_likes", membership)
            state = LikeState.NOT_LIKED
            estimate = max(current - 1, 0)
        else:
            try:
                await self._db.insert("post_likes", membership)
                created = True
            except DuplicateRowError:
                logger.info(f"Like by {user_id} on post {post_id} already recorded")
            state = LikeState.LIKED
            estimate = current + 1

        count = await self._refresh_counter(post_id, fallback=estimate)
        result = ToggleResult(state=state, like_count=count)

        if created:
            await self._notify_like(post_id, user_id)

        return result

    async def get_status(self, post_id: int, user_id: str) -> LikeStatus:
        """Caller's like state and the post's counter."""
        count = await self._get_counter(post_id)
        existing = await self._db.select(
            "post_likes", "id", {"post_id": post_id, "user_id": user_id}
        )
        return LikeStatus(is_liked=bool(existing), like_count=count)

    async def get_public_count(self, post_id: int) -> LikeCount:
        """Counter as the public policy sees it."""
        return LikeCount(like_count=await self._get_counter(post_id))

    async def reconcile(self, post_id: int) -> ReconcileResult:
        """
        Recompute the counter from membership rows and store it.

        Raises:
            ReconcileRequiresAdminError: If this service does not run on a
                privileged client.
            PostNotFoundError: If the post does not exist.
        """
        if not self._db.privileged:
            raise ReconcileRequiresAdminError(post_id)

        previous = await self._get_counter(post_id)
        count = await self._db.rpc(LIKE_COUNTER_FUNCTION, {"target_post_id": post_id})
        if count is None:
            raise PostNotFoundError(post_id)
        count = int(count)

        if count != previous:
            logger.warning(
                f"Like counter for post {post_id} drifted: stored {previous}, membership {count}"
            )

        return ReconcileResult(post_id=post_id, previous_count=previous, like_count=count)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    async def _get_counter(self, post_id: int) -> int:
        posts = await self._db.select("blog_posts", "id, likes", {"id": post_id})
        if not posts:
            raise PostNotFoundError(post_id)
        return int(posts[0].get("likes") or 0)

    async def _refresh_counter(self, post_id: int, fallback: int) -> int:
        try:
            count = await self._db.rpc(LIKE_COUNTER_FUNCTION, {"target_post_id": post_id})
        except BlogError as e:
            logger.warning(
                f"Like counter for post {post_id} not refreshed ({e.code}); needs reconcile"
            )
            return fallback

        if count is None:
            logger.warning(f"Like counter for post {post_id} matched no post row; needs reconcile")
            return fallback
        return int(count)

    async def _notify_like(self, post_id: int, user_id: str) -> None:
        if self._notifications is None:
            return

        try:
            users = await self._db.select("users", "name, username", {"id": user_id})
        except BlogError as e:
            logger.warning(f"Could not load liker {user_id} for notification ({e.code})")
            return
        if not users:
            logger.info(f"Liker {user_id} has no profile; skipping like notification")
            return

        display_name = users[0].get("name") or users[0].get("username") or user_id
        await self._notifications.notify_admins(
            "New Like",
            f"{display_name} liked a post",
            NotificationType.LIKE,
            related_post_id=post_id,
            related_user_id=user_id,
        )
