"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a bearer token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair is rejected at login."""

    def __init__(self, message: str = "Your password is incorrect or this email doesn't exist"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class ProfileNotFoundError(NotFoundError):
    """
    Raised when the identity exists but has no application profile.

    Distinct from InsufficientPermissionsError: the caller authenticated,
    but there is no users row to read a role from.
    """

    def __init__(self, user_id: str):
        super().__init__(
            f"User profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class UsernameTakenError(ValidationError):
    """Raised when registering with a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            "This username is already taken",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class EmailAlreadyRegisteredError(ValidationError):
    """Raised when the identity provider already knows the email."""

    def __init__(self):
        super().__init__("User with this email already exists", code="EMAIL_ALREADY_REGISTERED")


class RegistrationError(ValidationError):
    """Raised when the identity provider refuses to create the account."""

    def __init__(self, message: str = "Failed to create user. Please try again."):
        super().__init__(message, code="REGISTRATION_FAILED")


class EmptyProfileUpdateError(ValidationError):
    """Raised when a profile update carries nothing to change."""

    def __init__(self):
        super().__init__("No data provided to update", code="EMPTY_PROFILE_UPDATE")
