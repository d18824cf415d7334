"""
Base repository class for database access.

Provides a common abstraction layer for all services that talk to the
store through a request-scoped data client.
"""

from typing import TypeVar, Generic

from .interfaces import IDataClient


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Data client access via self._db
    - Generic type parameter for model type hints

    The data client is bound to one credential, so a repository instance
    must not outlive the request it was built for.

    Example:
        class CategoryService(BaseRepository[Category]):
            async def get(self, category_id: int) -> Optional[Category]:
                rows = await self._db.select("categories", "*", {"id": category_id})
                if not rows:
                    return None
                return Category(**rows[0])
    """

    def __init__(self, db: IDataClient) -> None:
        """
        Initialize the repository with a data client.

        Args:
            db: Request-scoped data client for database operations.
        """
        self._db = db
