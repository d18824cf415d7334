"""
Likes module.

Toggles a user's like on a post and keeps the post's cached like counter
in step with the membership rows.

Public API:
- LikeService: toggle, status, public count, reconcile
- ToggleResult, LikeState: Outcome of a toggle
- ReconcileRequiresAdminError: reconcile attempted without the admin client
"""

from .exceptions import ReconcileRequiresAdminError
from .models import LikeCount, LikeState, LikeStatus, ReconcileResult, ToggleResponse, ToggleResult
from .service import LikeService

__all__ = [
    "LikeService",
    "LikeCount",
    "LikeState",
    "LikeStatus",
    "ReconcileRequiresAdminError",
    "ReconcileResult",
    "ToggleResponse",
    "ToggleResult",
]
