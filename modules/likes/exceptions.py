"""
Likes module exceptions.
"""

from shared.exceptions import AuthorizationError


class ReconcileRequiresAdminError(AuthorizationError):
    """
    Raised when reconcile runs on a non-privileged client.

    A user-scoped client sees only the caller's own membership rows, so a
    count taken through it would be wrong for everyone else.
    """

    def __init__(self, post_id: int):
        super().__init__(
            "Like counter reconciliation requires an admin data client",
            code="RECONCILE_REQUIRES_ADMIN",
            details={"post_id": post_id},
        )
