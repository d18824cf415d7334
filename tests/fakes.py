"""
In-memory stand-ins for the data layer and identity provider.

FakeStore holds tables as lists of dicts and applies per-table row-level
policies the way the database does: hidden rows are silently skipped by
select/update/delete, and a denied insert raises PolicyDeniedError.
Clients built from it satisfy IDataClient, so services run unchanged.
Stored functions run with definer rights, like their SQL counterparts
under migrations/.
"""

import re
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from modules.auth.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from modules.auth.models import SignUpResult
from shared.exceptions import (
    DataAccessError,
    DuplicateRowError,
    MalformedQueryError,
    PolicyDeniedError,
)
from shared.filters import AnyILike, ILike, In, QueryOptions, build_filters
from shared.models import Principal


Row = dict[str, Any]


@dataclass(frozen=True)
class Caller:
    """Who a fake client acts as."""

    user_id: Optional[str]
    is_admin: bool = False


Predicate = Callable[[Row, Caller], bool]


def own(column: str = "user_id") -> Predicate:
    return lambda row, caller: caller.user_id is not None and str(row.get(column)) == caller.user_id


def admin_role(row: Row, caller: Caller) -> bool:
    return caller.is_admin


def anyone(row: Row, caller: Caller) -> bool:
    return True


def either(*predicates: Predicate) -> Predicate:
    return lambda row, caller: any(p(row, caller) for p in predicates)


def published(row: Row, caller: Caller) -> bool:
    return row.get("status_id") == 2


# Mirrors the blog's row-level policies
DEFAULT_POLICIES: dict[str, dict[str, Predicate]] = {
    "users": {
        "select": either(own("id"), admin_role),
        "insert": own("id"),
        "update": either(own("id"), admin_role),
        "delete": admin_role,
    },
    "blog_posts": {
        "select": either(published, admin_role),
        "insert": admin_role,
        "update": admin_role,
        "delete": admin_role,
    },
    "categories": {
        "select": anyone,
        "insert": admin_role,
        "update": admin_role,
        "delete": admin_role,
    },
    "comments": {
        "select": anyone,
        "insert": own(),
        "update": own(),
        "delete": own(),
    },
    "post_likes": {
        "select": own(),
        "insert": own(),
        "delete": own(),
    },
    "notifications": {
        "select": either(own(), admin_role),
        "insert": admin_role,
        "update": either(own(), admin_role),
        "delete": admin_role,
    },
}

UNIQUE_KEYS: dict[str, list[tuple[str, ...]]] = {
    "users": [("id",), ("username",)],
    "categories": [("name",)],
    "post_likes": [("post_id", "user_id")],
}

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def like(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    regex = "^" + ".*".join(re.escape(part) for part in pattern.split("%")) + "$"
    return re.match(regex, str(value), re.IGNORECASE | re.DOTALL) is not None


def matches(row: Row, filters: Optional[Mapping[str, Any]]) -> bool:
    """Evaluate a filter mapping the way the query builder would."""
    for condition in build_filters(filters):
        if isinstance(condition, AnyILike):
            if not any(like(row.get(column), condition.pattern) for column in condition.columns):
                return False
            continue
        value = row.get(condition.column)
        if isinstance(condition, In):
            if value not in condition.values:
                return False
        elif isinstance(condition, ILike):
            if not like(value, condition.pattern):
                return False
        elif condition.value is None:
            if value is not None:
                return False
        elif value != condition.value:
            return False
    return True


class FakeStore:
    """Tables plus policies; hands out clients bound to one caller."""

    def __init__(self, policies: Optional[dict[str, dict[str, Predicate]]] = None):
        self.policies = policies or DEFAULT_POLICIES
        self.tables: dict[str, list[Row]] = defaultdict(list)
        self._next_id: dict[str, int] = defaultdict(int)
        self._clock = 0
        self._failures: dict[tuple[str, str], Exception] = {}
        self.admin_reasons: list[str] = []
        self.functions: dict[str, Callable[..., Any]] = {
            "refresh_post_like_count": self.refresh_post_like_count,
        }

    # -- setup ----------------------------------------------------------------

    def seed(self, table: str, *rows: Row) -> list[Row]:
        return [self._store(table, dict(row)) for row in rows]

    def add_user(self, user_id: str, role: str = "user", **fields: Any) -> Row:
        fields.setdefault("username", user_id)
        fields.setdefault("name", user_id.title())
        return self.seed("users", {"id": user_id, "role": role, "status": "active", **fields})[0]

    def add_post(self, post_id: int, likes: int = 0, status_id: int = 2, **fields: Any) -> Row:
        fields.setdefault("title", f"Post {post_id}")
        fields.setdefault("category_id", 1)
        return self.seed("blog_posts", {"id": post_id, "likes": likes, "status_id": status_id, **fields})[0]

    def fail_on(self, table: str, operation: str, error: Optional[Exception] = None) -> None:
        """Make every future operation of this kind raise."""
        self._failures[(table, operation)] = error or DataAccessError(f"{operation} on {table} failed")

    def rows(self, table: str, **filters: Any) -> list[Row]:
        return [dict(row) for row in self.tables[table] if matches(row, filters)]

    def like_count(self, post_id: int) -> int:
        return self.rows("blog_posts", id=post_id)[0]["likes"]

    def membership_count(self, post_id: int) -> int:
        return len(self.rows("post_likes", post_id=post_id))

    # -- stored functions -----------------------------------------------------

    def refresh_post_like_count(self, target_post_id: int) -> Optional[int]:
        posts = [row for row in self.tables["blog_posts"] if row.get("id") == target_post_id]
        if not posts:
            return None
        posts[0]["likes"] = self.membership_count(target_post_id)
        return posts[0]["likes"]

    # -- clients --------------------------------------------------------------

    def client(self, user_id: Optional[str] = None) -> "InMemoryDataClient":
        return InMemoryDataClient(self, user_id=user_id)

    def anonymous(self) -> "InMemoryDataClient":
        return InMemoryDataClient(self, user_id=None)

    def admin(self, reason: str = "test") -> "InMemoryDataClient":
        self.admin_reasons.append(reason)
        return InMemoryDataClient(self, privileged=True)

    def caller(self, user_id: Optional[str]) -> Caller:
        if user_id is None:
            return Caller(user_id=None)
        is_admin = any(
            str(u.get("id")) == user_id and u.get("role") == "admin" for u in self.tables["users"]
        )
        return Caller(user_id=user_id, is_admin=is_admin)

    # -- internals ------------------------------------------------------------

    def _store(self, table: str, row: Row) -> Row:
        self._check_unique(table, row)
        if "id" not in row:
            self._next_id[table] += 1
            row["id"] = self._next_id[table]
        elif isinstance(row["id"], int):
            self._next_id[table] = max(self._next_id[table], row["id"])
        if "created_at" not in row:
            self._clock += 1
            row["created_at"] = (EPOCH + timedelta(seconds=self._clock)).isoformat()
        self.tables[table].append(row)
        return row

    def _check_unique(
        self, table: str, row: Row, ignore: Optional[Row] = None, operation: str = "insert"
    ) -> None:
        for key in UNIQUE_KEYS.get(table, []):
            if not all(row.get(column) is not None for column in key):
                continue
            for existing in self.tables[table]:
                if existing is ignore:
                    continue
                if all(existing.get(column) == row.get(column) for column in key):
                    raise DuplicateRowError(table, operation)

    def _raise_injected(self, table: str, operation: str) -> None:
        error = self._failures.get((table, operation))
        if error is not None:
            raise error


class InMemoryDataClient:
    """IDataClient over a FakeStore, bound to one caller or to the service role."""

    def __init__(self, store: FakeStore, user_id: Optional[str] = None, privileged: bool = False):
        self._store = store
        self.user_id = user_id
        self.privileged = privileged
        self.anonymous = user_id is None and not privileged

    def _allowed(self, table: str, operation: str, row: Row) -> bool:
        if self.privileged:
            return True
        predicate = self._store.policies.get(table, {}).get(operation)
        if predicate is None:
            return False
        return predicate(row, self._store.caller(self.user_id))

    def _visible(self, table: str, operation: str, filters: Optional[Mapping[str, Any]]) -> list[Row]:
        return [
            row
            for row in self._store.tables[table]
            if matches(row, filters) and self._allowed(table, operation, row)
        ]

    @staticmethod
    def _require_filters(table: str, operation: str, filters: Mapping[str, Any]) -> None:
        if not build_filters(filters):
            raise MalformedQueryError(f"Refusing unfiltered {operation} on {table}")

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> list[Row]:
        self._store._raise_injected(table, "select")
        rows = self._visible(table, "select", filters)
        if options is not None:
            if options.order is not None:
                column = options.order.column
                rows = sorted(
                    rows,
                    key=lambda r: (r.get(column) is None, r.get(column)),
                    reverse=not options.order.ascending,
                )
            if options.limit is not None:
                start = options.offset or 0
                rows = rows[start:start + options.limit]
        return [dict(row) for row in rows]

    async def count(self, table: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        self._store._raise_injected(table, "select")
        return len(self._visible(table, "select", filters))

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        self._store._raise_injected(table, "insert")
        candidate = dict(row)
        if not self._allowed(table, "insert", candidate):
            raise PolicyDeniedError(table, "insert")
        return dict(self._store._store(table, candidate))

    async def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> Optional[Row]:
        self._require_filters(table, "update", filters)
        self._store._raise_injected(table, "update")
        targets = self._visible(table, "update", filters)
        for row in targets:
            self._store._check_unique(table, {**row, **patch}, ignore=row, operation="update")
            row.update(patch)
        return dict(targets[0]) if targets else None

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        self._require_filters(table, "delete", filters)
        self._store._raise_injected(table, "delete")
        targets = self._visible(table, "delete", filters)
        self._store.tables[table] = [r for r in self._store.tables[table] if r not in targets]
        return [dict(row) for row in targets]

    async def rpc(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        self._store._raise_injected(name, "rpc")
        function = self._store.functions.get(name)
        if function is None:
            raise MalformedQueryError(f"Unknown function {name}")
        return function(**dict(params or {}))


class FakeClientFactory:
    """Drop-in for DataClientFactory that hands out in-memory clients."""

    def __init__(self, store: FakeStore, tokens: Optional[Mapping[str, str]] = None):
        self._store = store
        self._tokens = dict(tokens or {})

    async def scoped(self, access_token: Optional[str]) -> InMemoryDataClient:
        if not access_token:
            return self._store.anonymous()
        return self._store.client(self._tokens.get(access_token))

    async def anonymous(self) -> InMemoryDataClient:
        return self._store.anonymous()

    async def admin(self, reason: str) -> InMemoryDataClient:
        return self._store.admin(reason)


class FakeIdentityProvider:
    """IIdentityProvider backed by dicts of tokens and accounts."""

    def __init__(self, tokens: Optional[Mapping[str, Principal]] = None):
        self.tokens: dict[str, Principal] = dict(tokens or {})
        self.accounts: dict[str, tuple[str, str]] = {}
        self.get_user_calls = 0

    async def get_user(self, token: str) -> Principal:
        self.get_user_calls += 1
        principal = self.tokens.get(token)
        if principal is None:
            raise InvalidTokenError()
        return principal

    async def sign_in(self, email: str, password: str) -> str:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise InvalidCredentialsError()
        return f"session-for-{account[0]}"

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        if email in self.accounts:
            raise EmailAlreadyRegisteredError()
        user_id = f"user-{len(self.accounts) + 1}"
        self.accounts[email] = (user_id, password)
        return SignUpResult(user_id=user_id, access_token=None)
