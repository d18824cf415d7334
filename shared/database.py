"""
Scoped data access over Supabase.

Provides user-scoped clients (every query carries the caller's token, so
Row Level Security sees the caller), anonymous clients (public policy) and
service-role clients (bypass RLS) for explicitly privileged operations.

Clients are built per request by DataClientFactory and are never cached:
an instance bound to one credential must not serve another.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from supabase import AsyncClient, AsyncClientOptions, acreate_client

from .config import Settings, get_settings
from .exceptions import (
    AuthenticationError,
    DataAccessError,
    DuplicateRowError,
    MalformedQueryError,
    PolicyDeniedError,
    UpstreamUnavailableError,
)
from .filters import QueryOptions, apply_filters, apply_options, build_filters
from .interfaces import Row

logger = logging.getLogger(__name__)

# PostgreSQL / PostgREST error codes
_POLICY_DENIED_CODES = {"42501"}
_MALFORMED_CODES = {"42P01", "42703", "42883", "22P02", "PGRST100", "PGRST200", "PGRST204", "PGRST205"}
_JWT_REJECTED_CODES = {"PGRST301", "PGRST302"}
_UNIQUE_VIOLATION_CODES = {"23505"}


def translate_api_error(error: APIError, table: str, operation: str) -> Exception:
    """Map a PostgREST error onto the data-access taxonomy."""
    code = str(error.code or "")
    if code in _POLICY_DENIED_CODES:
        return PolicyDeniedError(table, operation)
    if code in _UNIQUE_VIOLATION_CODES:
        return DuplicateRowError(table, operation)
    if code in _MALFORMED_CODES:
        return MalformedQueryError(
            f"Malformed {operation} on {table}: {error.message}",
            details={"table": table, "operation": operation, "store_code": code},
        )
    if code in _JWT_REJECTED_CODES:
        return AuthenticationError(
            "Store rejected the bearer token",
            code="INVALID_TOKEN",
        )
    return DataAccessError(
        f"{operation} on {table} failed: {error.message}",
        details={"table": table, "operation": operation, "store_code": code},
    )


class ScopedDataClient:
    """
    Data client bound to a single credential.

    Every operation is issued through the wrapped Supabase client, which
    carries either the caller's access token or no token at all (public
    policy). Filter composition is shared by reads and writes.
    """

    privileged = False

    def __init__(self, client: AsyncClient, anonymous: bool = False) -> None:
        self._client = client
        self.anonymous = anonymous

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> list[Row]:
        query = self._client.table(table).select(columns)
        query = apply_filters(query, build_filters(filters))
        query = apply_options(query, options)
        response = await self._execute(query, table, "select")
        return list(response.data or [])

    async def count(self, table: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        query = self._client.table(table).select("*", count=CountMethod.exact, head=True)
        query = apply_filters(query, build_filters(filters))
        response = await self._execute(query, table, "count")
        return response.count or 0

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        query = self._client.table(table).insert(dict(row))
        response = await self._execute(query, table, "insert")
        if not response.data:
            raise PolicyDeniedError(table, "insert")
        return response.data[0]

    async def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> Optional[Row]:
        conditions = self._require_filters(filters, table, "update")
        query = apply_filters(self._client.table(table).update(dict(patch)), conditions)
        response = await self._execute(query, table, "update")
        if not response.data:
            return None
        return response.data[0]

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        conditions = self._require_filters(filters, table, "delete")
        query = apply_filters(self._client.table(table).delete(), conditions)
        response = await self._execute(query, table, "delete")
        return list(response.data or [])

    async def rpc(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        query = self._client.rpc(name, dict(params or {}))
        response = await self._execute(query, name, "rpc")
        return response.data

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_filters(filters: Mapping[str, Any], table: str, operation: str):
        conditions = build_filters(filters)
        if not conditions:
            raise MalformedQueryError(
                f"Refusing unfiltered {operation} on {table}",
                details={"table": table, "operation": operation},
            )
        return conditions

    async def _execute(self, query: Any, table: str, operation: str) -> Any:
        try:
            return await query.execute()
        except APIError as e:
            raise translate_api_error(e, table, operation) from e
        except httpx.HTTPError as e:
            logger.warning(f"Store unreachable during {operation} on {table}: {e}")
            raise UpstreamUnavailableError("store") from e


class AdminDataClient(ScopedDataClient):
    """
    Data client bound to the service-role key.

    Bypasses Row Level Security entirely. Only built through
    DataClientFactory.admin(), which records why it was needed.
    """

    privileged = True

    def __init__(self, client: AsyncClient, reason: str) -> None:
        super().__init__(client, anonymous=False)
        self.reason = reason


class DataClientFactory:
    """
    Builds one data client per request/credential.

    Holds only immutable settings; every call creates a fresh Supabase
    client so nothing leaks between principals.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def _options(self) -> AsyncClientOptions:
        return AsyncClientOptions(
            postgrest_client_timeout=self._settings.store_timeout_seconds,
            auto_refresh_token=False,
            persist_session=False,
        )

    async def scoped(self, access_token: Optional[str]) -> ScopedDataClient:
        """
        Get a client that runs under the caller's RLS policies.

        Args:
            access_token: Caller's bearer token, or None for public access

        Returns:
            ScopedDataClient bound to that credential
        """
        settings = self._settings
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )

        client = await acreate_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=self._options(),
        )
        if access_token:
            # Forward the caller's identity to PostgREST on every request
            client.postgrest.auth(access_token)
        return ScopedDataClient(client, anonymous=not access_token)

    async def anonymous(self) -> ScopedDataClient:
        """Get a client that sees only what the public policy exposes."""
        return await self.scoped(None)

    async def admin(self, reason: str) -> AdminDataClient:
        """
        Get a service-role client (bypasses RLS).

        Args:
            reason: Why the operation must cross ownership boundaries.
                Logged for auditing.
        """
        settings = self._settings
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )

        logger.info(f"Opening admin data client: {reason}")
        client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=self._options(),
        )
        return AdminDataClient(client, reason)
