"""
Category service.

Reads are public. Create and rename run on the admin caller's scoped
client; the cascading delete needs an admin data client because the
comments and likes it removes belong to other users.
"""

import logging
from typing import Optional

from shared.exceptions import DuplicateRowError
from shared.filters import OrderBy, QueryOptions
from shared.repository import BaseRepository

from .exceptions import CategoryExistsError, CategoryNotFoundError
from .models import Category, CategoryDeleteResult, slugify

logger = logging.getLogger(__name__)


class CategoryService(BaseRepository[Category]):
    """Category reads and admin maintenance."""

    async def list_categories(self) -> list[Category]:
        rows = await self._db.select(
            "categories", "*", options=QueryOptions(order=OrderBy(column="name"))
        )
        return [Category(**row) for row in rows]

    async def get_category(self, category_id: int) -> Category:
        rows = await self._db.select("categories", "*", {"id": category_id})
        if not rows:
            raise CategoryNotFoundError(category_id)
        return Category(**rows[0])

    async def create_category(self, name: str) -> Category:
        await self._ensure_name_free(name)
        try:
            row = await self._db.insert("categories", {"name": name, "slug": slugify(name)})
        except DuplicateRowError:
            raise CategoryExistsError(name)
        logger.info(f"Created category {row.get('id')}: {name}")
        return Category(**row)

    async def update_category(self, category_id: int, name: str) -> Category:
        await self.get_category(category_id)
        await self._ensure_name_free(name, exclude_id=category_id)
        try:
            row = await self._db.update(
                "categories", {"name": name, "slug": slugify(name)}, {"id": category_id}
            )
        except DuplicateRowError:
            raise CategoryExistsError(name)
        if row is None:
            raise CategoryNotFoundError(category_id)
        return Category(**row)

    async def delete_category(self, category_id: int) -> CategoryDeleteResult:
        """Delete a category with the comments and likes of its posts.

        The posts themselves go with the category through the foreign key
        cascade.
        """
        await self.get_category(category_id)

        posts = await self._db.select("blog_posts", "id", {"category_id": category_id})
        logger.info(f"Deleting category {category_id} with {len(posts)} posts")
        for post in posts:
            await self._db.delete("comments", {"post_id": post["id"]})
            await self._db.delete("post_likes", {"post_id": post["id"]})

        deleted = await self._db.delete("categories", {"id": category_id})
        if not deleted:
            raise CategoryNotFoundError(category_id)
        return CategoryDeleteResult(category_id=category_id, posts_cleaned=len(posts))

    async def _ensure_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        rows = await self._db.select("categories", "id", {"name": name})
        if any(row.get("id") != exclude_id for row in rows):
            raise CategoryExistsError(name)
