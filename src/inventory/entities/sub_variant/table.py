"""SubVariant database table model."""

import uuid
from decimal import Decimal

from sqlmodel import Field

from src.inventory.core.entities._base import EntityTable, ExactDecimal


class SubVariantTable(EntityTable, table=True):
    """Database persistence model for sub-variants."""

    __tablename__ = "sub_variants"

    variant_id: uuid.UUID = Field(foreign_key="variants.id", index=True)
    option: str = Field(max_length=255)
    stock: Decimal = Field(default=Decimal("0"), sa_type=ExactDecimal(18, 3))
