"""
Base exception classes for the blog backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps the base classes onto HTTP status codes.
"""

from typing import Optional, Any


class BlogError(Exception):
    """
    Base exception for all blog backend errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(BlogError):
    """Resource not found (or hidden by row-level policy)."""

    pass


class ValidationError(BlogError):
    """Input validation failed."""

    pass


class AuthenticationError(BlogError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(BlogError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(BlogError):
    """The write collides with existing state."""

    pass


class ExternalServiceError(BlogError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class UpstreamUnavailableError(ExternalServiceError):
    """The identity provider or the store could not be reached in time."""

    def __init__(self, service: str, message: Optional[str] = None):
        super().__init__(
            message or f"{service} is unavailable",
            service=service,
            code="UPSTREAM_UNAVAILABLE",
        )


class DataAccessError(ExternalServiceError):
    """The store rejected an operation for a reason not covered below."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="store", code=code or "DATA_ACCESS_ERROR", details=details)


class PolicyDeniedError(AuthorizationError):
    """A row-level policy rejected a write for the bound credential."""

    def __init__(self, table: str, operation: str):
        super().__init__(
            f"Row-level policy denied {operation} on {table}",
            code="POLICY_DENIED",
            details={"table": table, "operation": operation},
        )


class DuplicateRowError(ConflictError):
    """A unique constraint rejected an insert or update."""

    def __init__(self, table: str, operation: str):
        super().__init__(
            f"Duplicate row rejected by {table} during {operation}",
            code="DUPLICATE_ROW",
            details={"table": table, "operation": operation},
        )


class MalformedQueryError(BlogError):
    """A query was built against an unknown table/column or without required filters."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="MALFORMED_QUERY", details=details)
