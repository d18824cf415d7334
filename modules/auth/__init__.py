"""
Authentication module.

Resolves bearer tokens to principals, gates requests on the stored role,
and handles registration, sign-in and profile edits.

Public API:
- IAuthService: Interface for auth operations
- IIdentityProvider: Interface for the token/credential authority
- UserProfile: Profile with stored role
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IIdentityProvider
from .models import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    SignUpResult,
    TokenResponse,
    UserProfile,
)
from .exceptions import (
    EmptyProfileUpdateError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    ProfileNotFoundError,
    RegistrationError,
    UsernameTakenError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityProvider",
    # Models
    "LoginRequest",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "SignUpResult",
    "TokenResponse",
    "UserProfile",
    # Exceptions
    "EmptyProfileUpdateError",
    "EmailAlreadyRegisteredError",
    "ExpiredTokenError",
    "InsufficientPermissionsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "ProfileNotFoundError",
    "RegistrationError",
    "UsernameTakenError",
]
