"""Entity: Product."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from src.inventory.core.entities._base import TimestampedEntity


class ProductCreate(BaseModel):
    """Request body for creating or replacing a product.

    Identifier and timestamps are assigned by the repository and are not
    accepted from clients.
    """

    product_code: str = Field(
        min_length=1, max_length=64, description="Unique business key"
    )
    product_name: str = Field(min_length=1, max_length=255, description="Display name")
    product_image: str | None = Field(
        default=None, max_length=1024, description="Reference to the product image"
    )
    created_user: uuid.UUID | None = Field(
        default=None, description="Identifier of the user who created the product"
    )
    is_favourite: bool = Field(default=False)
    active: bool = Field(default=True)
    hsn_code: str | None = Field(
        default=None, max_length=16, description="HSN tax classification code"
    )
    total_stock: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=18, decimal_places=3
    )
    category_id: uuid.UUID | None = Field(default=None)


class Product(ProductCreate, TimestampedEntity):
    """Product entity representing a stocked item.

    ``total_stock`` is maintained by ``InventoryService``: once the product has
    sub-variants it equals the sum of their stocks.
    """
