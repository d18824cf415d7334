"""
Typed filter specification for data-client queries.

A filter mapping (column -> value) is classified into ``Eq``, ``In``,
``ILike`` and ``AnyILike`` conditions, which are ANDed onto a query in
insertion order. The same composition is used for reads and for
update/delete targets, so "what I can see" and "what I can modify" are
computed identically.

Query builders only need ``eq``, ``in_``, ``ilike``, ``or_``, ``is_``,
``order`` and ``range`` methods (the PostgREST fluent API provides all
of them).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, Field, model_validator

from .exceptions import MalformedQueryError


WILDCARD = "%"

Q = TypeVar("Q")


@dataclass(frozen=True)
class Eq:
    """column = value (``None`` means IS NULL)."""

    column: str
    value: Any


@dataclass(frozen=True)
class In:
    """column is a member of values."""

    column: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class ILike:
    """Case-insensitive pattern match; ``%`` is the wildcard."""

    column: str
    pattern: str


@dataclass(frozen=True)
class AnyILike:
    """
    Case-insensitive pattern match on at least one of several columns.

    Keyed in a filter mapping by its comma-joined column list, e.g.
    ``{"title,content": AnyILike(("title", "content"), "%cat%")}``.
    """

    columns: tuple[str, ...]
    pattern: str

    @property
    def column(self) -> str:
        return ",".join(self.columns)


Filter = Union[Eq, In, ILike, AnyILike]


def classify(column: str, value: Any) -> Filter:
    """Classify a single filter value."""
    if isinstance(value, (Eq, In, ILike, AnyILike)):
        if value.column != column:
            raise MalformedQueryError(
                f"Filter for {column!r} targets column {value.column!r}",
                details={"column": column},
            )
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return In(column, tuple(value))
    if isinstance(value, str) and WILDCARD in value:
        return ILike(column, value)
    return Eq(column, value)


def build_filters(filters: Optional[Mapping[str, Any]]) -> list[Filter]:
    """Turn a filter mapping into typed filters, preserving insertion order."""
    if not filters:
        return []
    return [classify(column, value) for column, value in filters.items()]


def apply_filters(query: Q, filters: list[Filter]) -> Q:
    """AND every filter onto the query builder."""
    for condition in filters:
        if isinstance(condition, In):
            query = query.in_(condition.column, list(condition.values))
        elif isinstance(condition, ILike):
            query = query.ilike(condition.column, condition.pattern)
        elif isinstance(condition, AnyILike):
            query = query.or_(_or_pattern(condition))
        elif condition.value is None:
            query = query.is_(condition.column, "null")
        else:
            query = query.eq(condition.column, condition.value)
    return query


def _or_pattern(condition: AnyILike) -> str:
    # Double quotes keep commas and parentheses in the pattern literal
    literal = condition.pattern.replace("\\", "\\\\").replace('"', '\\"')
    return ",".join(f'{column}.ilike."{literal}"' for column in condition.columns)


class OrderBy(BaseModel):
    """Order specification for select queries."""

    column: str
    ascending: bool = True


class QueryOptions(BaseModel):
    """Ordering and page window for select queries."""

    order: Optional[OrderBy] = None
    limit: Optional[int] = Field(default=None, ge=1)
    offset: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _offset_requires_limit(self) -> "QueryOptions":
        if self.offset and self.limit is None:
            raise ValueError("offset requires limit")
        return self


def apply_options(query: Q, options: Optional[QueryOptions]) -> Q:
    """Apply ordering and the page window to a select query."""
    if options is None:
        return query
    if options.order is not None:
        query = query.order(options.order.column, desc=not options.order.ascending)
    if options.limit is not None:
        start = options.offset or 0
        query = query.range(start, start + options.limit - 1)
    return query
