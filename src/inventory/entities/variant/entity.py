"""Entity: Variant."""

import uuid

from pydantic import BaseModel, Field

from src.inventory.core.entities._base import Entity


class VariantCreate(BaseModel):
    """Request body for adding a variant to a product."""

    name: str = Field(
        min_length=1, max_length=255, description="Attribute name, e.g. Size"
    )


class Variant(VariantCreate, Entity):
    """Attribute level of a product, e.g. ``Size`` or ``Color``."""

    product_id: uuid.UUID = Field(description="Owning product")
