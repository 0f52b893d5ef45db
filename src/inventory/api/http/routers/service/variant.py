"""Variant API router."""

import uuid

from fastapi import APIRouter, Body, Depends, Request, Response

from src.inventory.api.http.deps import get_inventory_service
from src.inventory.core.services import InventoryService
from src.inventory.entities.sub_variant import SubVariant, SubVariantCreate
from src.inventory.entities.variant import Variant

router = APIRouter(prefix="/variants", tags=["variants"])


@router.get("/{variant_id}", response_model=Variant)
def get_variant(
    variant_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> Variant:
    """Get a variant by ID."""
    return service.get_variant(variant_id)


@router.delete("/{variant_id}", status_code=204)
def delete_variant(
    variant_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> None:
    """Delete a variant that has no sub-variants left."""
    service.delete_variant(variant_id)


@router.post(
    "/{variant_id}/sub-variants", response_model=SubVariant, status_code=201
)
def create_sub_variant(
    variant_id: uuid.UUID,
    request: Request,
    response: Response,
    sub_variant: SubVariantCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> SubVariant:
    """Add an option with its own stock to a variant."""
    created = service.add_sub_variant(variant_id, sub_variant)
    response.headers["Location"] = str(
        request.url_for("get_sub_variant", sub_variant_id=created.id)
    )
    return created


@router.get("/{variant_id}/sub-variants", response_model=list[SubVariant])
def list_sub_variants(
    variant_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> list[SubVariant]:
    """List the options of a variant."""
    return service.list_sub_variants(variant_id)
