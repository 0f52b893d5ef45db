"""Product API router."""

import uuid

from fastapi import APIRouter, Body, Depends, Request, Response

from src.inventory.api.http.deps import get_inventory_service
from src.inventory.core.services import InventoryService
from src.inventory.entities.product import Product, ProductCreate
from src.inventory.entities.variant import Variant, VariantCreate

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=Product, status_code=201)
def create_product(
    request: Request,
    response: Response,
    product: ProductCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> Product:
    """Create a new product."""
    created = service.create_product(product)
    response.headers["Location"] = str(
        request.url_for("get_product", product_id=created.id)
    )
    return created


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> Product:
    """Get a product by ID."""
    return service.get_product(product_id)


@router.get("", response_model=list[Product])
def list_products(
    active: bool | None = None,
    service: InventoryService = Depends(get_inventory_service),
) -> list[Product]:
    """List all products, optionally only active or inactive ones."""
    return service.list_products(active=active)


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: uuid.UUID,
    product: ProductCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> Product:
    """Replace the editable fields of a product."""
    return service.update_product(product_id, product)


@router.delete("/{product_id}", response_model=Product)
def delete_product(
    product_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> Product:
    """Deactivate a product. The record itself is kept."""
    return service.deactivate_product(product_id)


@router.post("/{product_id}/variants", response_model=Variant, status_code=201)
def create_variant(
    product_id: uuid.UUID,
    request: Request,
    response: Response,
    variant: VariantCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> Variant:
    """Add a variant to a product."""
    created = service.add_variant(product_id, variant)
    response.headers["Location"] = str(
        request.url_for("get_variant", variant_id=created.id)
    )
    return created


@router.get("/{product_id}/variants", response_model=list[Variant])
def list_variants(
    product_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> list[Variant]:
    """List the variants of a product."""
    return service.list_variants(product_id)
