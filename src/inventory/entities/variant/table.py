"""Variant database table model."""

import uuid

from sqlmodel import Field

from src.inventory.core.entities._base import EntityTable


class VariantTable(EntityTable, table=True):
    """Database persistence model for variants."""

    __tablename__ = "variants"

    product_id: uuid.UUID = Field(foreign_key="products.id", index=True)
    name: str = Field(max_length=255)
