from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest

from src.inventory.entities import (
    CategoryCreate,
    ProductCreate,
    SubVariantCreate,
    VariantCreate,
)


@pytest.fixture
def product_data() -> Callable[..., ProductCreate]:
    """Factory for product payloads with unique codes."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> ProductCreate:
        counter["n"] += 1
        fields: dict[str, Any] = {
            "product_code": f"P-{counter['n']:03d}",
            "product_name": f"Widget {counter['n']}",
            "hsn_code": "8471",
        }
        fields.update(overrides)
        return ProductCreate(**fields)

    return _make


@pytest.fixture
def variant_data() -> VariantCreate:
    return VariantCreate(name="Size")


@pytest.fixture
def sub_variant_data() -> Callable[..., SubVariantCreate]:
    def _make(option: str = "Large", stock: str | int = 5) -> SubVariantCreate:
        return SubVariantCreate(option=option, stock=Decimal(str(stock)))

    return _make


@pytest.fixture
def category_data() -> CategoryCreate:
    return CategoryCreate(name="Hardware")
