"""
Likes module data models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class LikeState(str, Enum):
    """Whether a user currently likes a post (derived from membership rows)."""

    LIKED = "liked"
    NOT_LIKED = "not_liked"


class ToggleResult(BaseModel):
    """Outcome of a like toggle."""

    state: LikeState
    like_count: int = Field(..., ge=0, description="Post counter after the write")

    @property
    def is_liked(self) -> bool:
        return self.state is LikeState.LIKED


class ToggleResponse(BaseModel):
    """API response for a like toggle."""

    message: str
    is_liked: bool
    like_count: int


class LikeStatus(BaseModel):
    """Caller's like state for a post plus its counter."""

    is_liked: bool
    like_count: int


class LikeCount(BaseModel):
    """Public like counter for a post."""

    like_count: int


class ReconcileResult(BaseModel):
    """Counter before and after reconciliation."""

    post_id: int
    previous_count: int
    like_count: int
