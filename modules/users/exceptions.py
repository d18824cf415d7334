"""
User moderation exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class SelfModerationError(ValidationError):
    """Raised when an admin tries to ban or delete their own account."""

    def __init__(self, user_id: str):
        super().__init__(
            "Administrators cannot moderate their own account",
            code="SELF_MODERATION",
            details={"user_id": user_id},
        )
