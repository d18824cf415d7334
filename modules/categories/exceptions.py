"""
Categories module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    def __init__(self, category_id: int):
        super().__init__(
            f"Category not found: {category_id}",
            code="CATEGORY_NOT_FOUND",
            details={"category_id": category_id},
        )


class CategoryExistsError(ValidationError):
    """Raised when another category already has the requested name."""

    def __init__(self, name: str):
        super().__init__(
            "Category with this name already exists",
            code="CATEGORY_EXISTS",
            details={"name": name},
        )
