"""
Post service.

Public listing only ever shows published posts. Admin reads and writes
run on the admin caller's scoped client, so the posts policy (admins see
drafts) still applies.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from shared.filters import AnyILike, ILike, OrderBy, QueryOptions
from shared.repository import BaseRepository

from .exceptions import PostNotFoundError
from .models import (
    AdminPostListResponse,
    Post,
    PostListResponse,
    PostRequest,
    PostStats,
    PostStatus,
)

logger = logging.getLogger(__name__)

POST_COLUMNS = "*, categories(name), statuses(status)"
ADMIN_SEARCH_COLUMNS = ("title", "description", "content")


class PostService(BaseRepository[Post]):
    """Post reads and admin maintenance."""

    async def list_published(
        self,
        page: int = 1,
        limit: int = 6,
        keyword: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> PostListResponse:
        filters: dict = {"status_id": int(PostStatus.PUBLISHED)}
        if category_id is not None:
            filters["category_id"] = category_id
        if keyword:
            filters["title"] = ILike(column="title", pattern=f"%{keyword}%")

        rows = await self._db.select(
            "blog_posts",
            POST_COLUMNS,
            filters,
            QueryOptions(
                order=OrderBy(column="date", ascending=False),
                limit=limit,
                offset=(page - 1) * limit,
            ),
        )
        return PostListResponse(posts=[Post(**row) for row in rows], page=page, limit=limit)

    async def list_all(
        self,
        page: int = 1,
        limit: int = 10,
        keyword: Optional[str] = None,
        status: Optional[PostStatus] = None,
        category_id: Optional[int] = None,
    ) -> AdminPostListResponse:
        """
        Posts in any state, newest first, with pagination totals.

        Args:
            page: Page number (1-based)
            limit: Posts per page
            keyword: Case-insensitive match on title, description or content
            status: Restrict to drafts or published posts
            category_id: Restrict to one category
        """
        filters: dict = {}
        if status is not None:
            filters["status_id"] = int(status)
        if category_id is not None:
            filters["category_id"] = category_id
        if keyword:
            search = AnyILike(ADMIN_SEARCH_COLUMNS, f"%{keyword}%")
            filters[search.column] = search

        rows = await self._db.select(
            "blog_posts",
            POST_COLUMNS,
            filters,
            QueryOptions(
                order=OrderBy(column="date", ascending=False),
                limit=limit,
                offset=(page - 1) * limit,
            ),
        )
        total = await self._db.count("blog_posts", filters)
        total_pages = (total + limit - 1) // limit

        return AdminPostListResponse(
            posts=[Post(**row) for row in rows],
            page=page,
            limit=limit,
            total_posts=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    async def get_stats(self) -> PostStats:
        return PostStats(
            total_posts=await self._db.count("blog_posts"),
            published_posts=await self._db.count(
                "blog_posts", {"status_id": int(PostStatus.PUBLISHED)}
            ),
            draft_posts=await self._db.count("blog_posts", {"status_id": int(PostStatus.DRAFT)}),
            total_categories=await self._db.count("categories"),
            total_users=await self._db.count("users"),
            total_comments=await self._db.count("comments"),
        )

    async def get_post(self, post_id: int) -> Post:
        rows = await self._db.select("blog_posts", POST_COLUMNS, {"id": post_id})
        if not rows:
            raise PostNotFoundError(post_id)
        return Post(**rows[0])

    async def create_post(self, request: PostRequest) -> Post:
        row = await self._db.insert("blog_posts", self._payload(request))
        logger.info(f"Created post {row.get('id')}")
        return Post(**row)

    async def update_post(self, post_id: int, request: PostRequest) -> Post:
        row = await self._db.update("blog_posts", self._payload(request), {"id": post_id})
        if row is None:
            raise PostNotFoundError(post_id)
        return Post(**row)

    async def delete_post(self, post_id: int) -> None:
        deleted = await self._db.delete("blog_posts", {"id": post_id})
        if not deleted:
            raise PostNotFoundError(post_id)
        logger.info(f"Deleted post {post_id}")

    @staticmethod
    def _payload(request: PostRequest) -> dict:
        data = request.model_dump(mode="json")
        data["date"] = datetime.now(timezone.utc).isoformat()
        return data
