"""
Categories module.
"""

from .exceptions import CategoryExistsError, CategoryNotFoundError
from .models import Category, CategoryDeleteResult, CategoryRequest, slugify
from .service import CategoryService

__all__ = [
    "CategoryService",
    "Category",
    "CategoryDeleteResult",
    "CategoryRequest",
    "slugify",
    "CategoryExistsError",
    "CategoryNotFoundError",
]
