"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Authorization role stored in the application's users table."""

    USER = "user"
    ADMIN = "admin"

    def satisfies(self, required: "Role") -> bool:
        """Whether this role grants everything ``required`` grants."""
        if self is Role.ADMIN:
            return True
        return self is required


class Principal(BaseModel):
    """
    Represents an authenticated identity making a request.

    Populated from the identity provider's answer for a bearer token.
    The id is assigned by the provider at registration and never changes.
    """

    id: str = Field(..., description="User ID (UUID from the identity provider)")
    email: str = Field(default="", description="User's email address")

    model_config = {"frozen": True}  # Make immutable for safety


class AuthorizedPrincipal(Principal):
    """
    A principal whose role has been read from the users table.

    Produced once per request by the role gate; handlers must not
    re-resolve it.
    """

    role: Role = Field(..., description="Role stored in the users table")


class AuthContext(BaseModel):
    """
    Request-scoped authentication context.

    Carries the principal together with the bearer token so that data
    clients can be built for exactly this caller.
    """

    principal: Principal
    token: str = Field(..., description="Bearer token the principal authenticated with")

    model_config = {"frozen": True}

    @property
    def user_id(self) -> str:
        return self.principal.id

    @property
    def role(self) -> Optional[Role]:
        """Resolved role, if the request passed through the role gate."""
        if isinstance(self.principal, AuthorizedPrincipal):
            return self.principal.role
        return None
