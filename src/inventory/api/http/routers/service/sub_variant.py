"""SubVariant API router."""

import uuid

from fastapi import APIRouter, Body, Depends

from src.inventory.api.http.deps import get_inventory_service
from src.inventory.core.services import InventoryService
from src.inventory.entities.sub_variant import SubVariant, SubVariantCreate

router = APIRouter(prefix="/sub-variants", tags=["sub-variants"])


@router.get("/{sub_variant_id}", response_model=SubVariant)
def get_sub_variant(
    sub_variant_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> SubVariant:
    return service.get_sub_variant(sub_variant_id)


@router.put("/{sub_variant_id}", response_model=SubVariant)
def update_sub_variant(
    sub_variant_id: uuid.UUID,
    sub_variant: SubVariantCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> SubVariant:
    """Replace option and stock; the owning product's total stock follows."""
    return service.update_sub_variant(sub_variant_id, sub_variant)


@router.delete("/{sub_variant_id}", status_code=204)
def delete_sub_variant(
    sub_variant_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> None:
    service.delete_sub_variant(sub_variant_id)
