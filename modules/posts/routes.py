"""
Post API endpoints.
"""

from typing import Literal, Optional
from fastapi import APIRouter, Depends, Path, Query

from api.middleware.auth import get_public_data_client, get_user_data_client, require_admin
from shared.interfaces import IDataClient
from shared.models import AuthContext

from .models import AdminPostListResponse, Post, PostListResponse, PostRequest, PostStats, PostStatus
from .service import PostService

router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(6, ge=1, le=100),
    keyword: Optional[str] = Query(None, max_length=200),
    category_id: Optional[int] = Query(None, ge=1),
    db: IDataClient = Depends(get_public_data_client),
) -> PostListResponse:
    """
    Published posts, newest first.

    Args:
        page: Page number (1-based)
        limit: Posts per page
        keyword: Case-insensitive match on the title
        category_id: Restrict to one category
    """
    return await PostService(db).list_published(page, limit, keyword, category_id)


@router.get("/admin", response_model=AdminPostListResponse)
async def list_all_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    keyword: Optional[str] = Query(None, max_length=200),
    status: Optional[Literal["draft", "published"]] = Query(None),
    category_id: Optional[int] = Query(None, ge=1),
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> AdminPostListResponse:
    """
    Posts in any state for the admin table (admin only).

    Args:
        keyword: Case-insensitive match on title, description or content
        status: "draft" or "published"
    """
    post_status = PostStatus[status.upper()] if status else None
    return await PostService(db).list_all(page, limit, keyword, post_status, category_id)


@router.get("/admin/{post_id}", response_model=Post)
async def get_any_post(
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> Post:
    """
    Read a post in any state, drafts included (admin only).
    """
    return await PostService(db).get_post(post_id)


@router.get("/stats", response_model=PostStats)
async def get_post_stats(
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> PostStats:
    """
    Dashboard counts (admin only).
    """
    return await PostService(db).get_stats()


@router.get("/{post_id}", response_model=Post)
async def get_post(
    post_id: int = Path(..., ge=1),
    db: IDataClient = Depends(get_public_data_client),
) -> Post:
    return await PostService(db).get_post(post_id)


@router.post("", response_model=Post, status_code=201)
async def create_post(
    request: PostRequest,
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> Post:
    """
    Create a post (admin only).
    """
    return await PostService(db).create_post(request)


@router.put("/{post_id}", response_model=Post)
async def update_post(
    request: PostRequest,
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> Post:
    """
    Replace a post's editable fields (admin only).
    """
    return await PostService(db).update_post(post_id, request)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> None:
    """
    Delete a post (admin only).
    """
    await PostService(db).delete_post(post_id)
