"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_client_factory
from api.middleware.auth import get_public_data_client, get_user_data_client, require_admin
from shared.database import DataClientFactory
from shared.interfaces import IDataClient
from shared.models import AuthContext

from .models import Category, CategoryDeleteResult, CategoryRequest
from .service import CategoryService

router = APIRouter()


@router.get("", response_model=list[Category])
async def list_categories(
    db: IDataClient = Depends(get_public_data_client),
) -> list[Category]:
    """
    All categories, by name.
    """
    return await CategoryService(db).list_categories()


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: int = Path(..., ge=1),
    db: IDataClient = Depends(get_public_data_client),
) -> Category:
    return await CategoryService(db).get_category(category_id)


@router.post("", response_model=Category, status_code=201)
async def create_category(
    request: CategoryRequest,
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> Category:
    """
    Create a category (admin only).
    """
    return await CategoryService(db).create_category(request.name)


@router.put("/{category_id}", response_model=Category)
async def update_category(
    request: CategoryRequest,
    category_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    db: IDataClient = Depends(get_user_data_client),
) -> Category:
    """
    Rename a category (admin only).
    """
    return await CategoryService(db).update_category(category_id, request.name)


@router.delete("/{category_id}", response_model=CategoryDeleteResult)
async def delete_category(
    category_id: int = Path(..., ge=1),
    context: AuthContext = Depends(require_admin),
    clients: DataClientFactory = Depends(get_client_factory),
) -> CategoryDeleteResult:
    """
    Delete a category together with its posts' comments and likes (admin only).
    """
    db = await clients.admin(f"category {category_id} cascade delete by {context.user_id}")
    return await CategoryService(db).delete_category(category_id)
