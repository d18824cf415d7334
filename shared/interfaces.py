"""
Data-access interface shared by every module.

Services depend on IDataClient, not on the Supabase-backed implementation,
so tests can hand them an in-memory client per test.
"""

from collections.abc import Mapping
from typing import Any, Optional, Protocol, runtime_checkable

from .filters import QueryOptions


Row = dict[str, Any]


@runtime_checkable
class IDataClient(Protocol):
    """
    Table-qualified CRUD bound to a single credential.

    Every call runs under the row-level policy of the bound credential
    (caller token, anonymous, or service role).
    """

    # True only for service-role clients, which see every row
    privileged: bool

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> list[Row]:
        """Rows visible under the bound policy that match every filter."""
        ...

    async def count(self, table: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Number of rows visible under the bound policy that match every filter."""
        ...

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """
        Insert a row and return it as persisted.

        Raises:
            PolicyDeniedError: If the policy rejects the write
        """
        ...

    async def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> Optional[Row]:
        """
        Patch matching rows.

        Returns:
            The first updated row, or None when nothing matched. Zero rows
            is not an error here; callers decide what it means.
        """
        ...

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        """Delete matching rows and return them (empty when nothing matched)."""
        ...

    async def rpc(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a stored procedure under the bound policy."""
        ...
