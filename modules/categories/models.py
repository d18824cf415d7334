"""
Categories module data models.
"""

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


def slugify(name: str) -> str:
    """Lowercase, drop punctuation, hyphenate whitespace."""
    slug = re.sub(r"[^a-z0-9 -]", "", name.lower())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug).strip("-")


class Category(BaseModel):
    """A post category."""

    id: int
    name: str
    slug: Optional[str] = None
    created_at: Optional[datetime] = None


class CategoryRequest(BaseModel):
    """Create or rename a category."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        return value


class CategoryDeleteResult(BaseModel):
    """Outcome of a cascading category delete."""

    category_id: int
    posts_cleaned: int = Field(..., ge=0, description="Posts whose comments and likes were removed")
