"""Entity: SubVariant."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from src.inventory.core.entities._base import Entity


class SubVariantCreate(BaseModel):
    """Request body for adding or replacing a sub-variant option."""

    option: str = Field(
        min_length=1, max_length=255, description="Option label, e.g. Large or Red"
    )
    stock: Decimal = Field(default=Decimal("0"), ge=0, max_digits=18, decimal_places=3)


class SubVariant(SubVariantCreate, Entity):
    """Concrete option of a variant with its own stock quantity."""

    variant_id: uuid.UUID = Field(description="Owning variant")
