"""Product database table model."""

import uuid
from decimal import Decimal

from sqlmodel import Field

from src.inventory.core.entities._base import ExactDecimal, TimestampedTable


class ProductTable(TimestampedTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "products"

    product_code: str = Field(max_length=64, unique=True, index=True)
    product_name: str = Field(max_length=255)
    product_image: str | None = Field(default=None, max_length=1024)
    created_user: uuid.UUID | None = None
    is_favourite: bool = False
    active: bool = True
    hsn_code: str | None = Field(default=None, max_length=16)
    total_stock: Decimal = Field(default=Decimal("0"), sa_type=ExactDecimal(18, 3))
    category_id: uuid.UUID | None = Field(
        default=None, foreign_key="categories.id", index=True
    )
