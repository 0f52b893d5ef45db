"""Entity: Category."""

from pydantic import BaseModel, Field

from src.inventory.core.entities._base import Entity


class CategoryCreate(BaseModel):
    """Request body for creating a category."""

    name: str = Field(min_length=1, max_length=255, description="Category name")


class Category(CategoryCreate, Entity):
    """Category grouping products.

    Products point at their category through ``Product.category_id``; the
    category holds no references of its own.
    """
