"""
Shared infrastructure for the blog backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Scoped/admin data clients and their factory
- filters: Typed filter specification and query composition
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import AdminDataClient, DataClientFactory, ScopedDataClient
from .exceptions import (
    BlogError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    ConflictError,
    DuplicateRowError,
    UpstreamUnavailableError,
    DataAccessError,
    PolicyDeniedError,
    MalformedQueryError,
)
from .filters import Eq, In, ILike, OrderBy, QueryOptions
from .interfaces import IDataClient
from .models import AuthContext, AuthorizedPrincipal, Principal, Role

__all__ = [
    "Settings",
    "get_settings",
    "AdminDataClient",
    "DataClientFactory",
    "ScopedDataClient",
    "IDataClient",
    "Eq",
    "In",
    "ILike",
    "OrderBy",
    "QueryOptions",
    "BlogError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "ConflictError",
    "DuplicateRowError",
    "UpstreamUnavailableError",
    "DataAccessError",
    "PolicyDeniedError",
    "MalformedQueryError",
    "AuthContext",
    "AuthorizedPrincipal",
    "Principal",
    "Role",
]
