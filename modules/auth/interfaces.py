"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The identity provider sits behind IIdentityProvider so tests can swap it
for an in-memory fake.
"""

from typing import Protocol, runtime_checkable

from shared.interfaces import IDataClient
from shared.models import AuthorizedPrincipal, Principal, Role

from .models import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    SignUpResult,
    TokenResponse,
    UserProfile,
)


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Remote identity provider boundary.

    Implementations normalize provider errors into the auth exceptions
    and UpstreamUnavailableError.
    """

    async def get_user(self, token: str) -> Principal:
        """Resolve a bearer token to the principal it was issued for."""
        ...

    async def sign_in(self, email: str, password: str) -> str:
        """Exchange credentials for an access token."""
        ...

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        """Create an identity for the credentials."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication and authorization operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def resolve(self, token: str) -> Principal:
        """
        Validate a bearer token and return the authenticated principal.

        Raises:
            MissingTokenError: If token is empty
            InvalidTokenError / ExpiredTokenError: If the provider rejects it
            UpstreamUnavailableError: If the provider cannot be reached
        """
        ...

    async def require_role(
        self,
        principal: Principal,
        required_role: Role,
        db: IDataClient,
    ) -> AuthorizedPrincipal:
        """
        Read the principal's stored role and check it.

        Args:
            principal: Resolved principal
            required_role: Role the operation needs
            db: Data client scoped to the principal's own token

        Raises:
            ProfileNotFoundError: If no users row exists for the principal
            InsufficientPermissionsError: If the stored role is not enough
        """
        ...

    async def login(self, request: LoginRequest) -> TokenResponse:
        """Sign in with email and password."""
        ...

    async def register(self, request: RegisterRequest, db: IDataClient) -> UserProfile:
        """Create the identity and its application profile."""
        ...

    async def get_profile(self, principal: Principal, db: IDataClient) -> UserProfile:
        """Read the caller's own profile."""
        ...

    async def update_profile(
        self,
        principal: Principal,
        request: ProfileUpdateRequest,
        db: IDataClient,
    ) -> UserProfile:
        """
        Update the caller's own name and introduction.

        Raises:
            EmptyProfileUpdateError: If the request changes nothing
            ProfileNotFoundError: If no users row exists for the principal
        """
        ...
