"""Category API router."""

import uuid

from fastapi import APIRouter, Body, Depends, Request, Response

from src.inventory.api.http.deps import get_inventory_service
from src.inventory.core.services import InventoryService
from src.inventory.entities.category import Category, CategoryCreate
from src.inventory.entities.product import Product

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=Category, status_code=201)
def create_category(
    request: Request,
    response: Response,
    category: CategoryCreate | None = Body(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> Category:
    """Create a new category."""
    created = service.create_category(category)
    response.headers["Location"] = str(
        request.url_for("get_category", category_id=created.id)
    )
    return created


@router.get("", response_model=list[Category])
def list_categories(
    service: InventoryService = Depends(get_inventory_service),
) -> list[Category]:
    """List all categories."""
    return service.list_categories()


@router.get("/{category_id}", response_model=Category)
def get_category(
    category_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> Category:
    """Get a category by ID."""
    return service.get_category(category_id)


@router.get("/{category_id}/products", response_model=list[Product])
def list_category_products(
    category_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> list[Product]:
    """List the products filed under a category."""
    return service.list_category_products(category_id)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: uuid.UUID,
    service: InventoryService = Depends(get_inventory_service),
) -> None:
    """Delete a category no product refers to."""
    service.delete_category(category_id)
