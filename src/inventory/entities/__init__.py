"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and request schema
- table.py: Database persistence model
- repository.py: Data access layer

Ownership runs Category -> Product -> Variant -> SubVariant and is expressed
through foreign-key fields only.
"""

from .category import Category, CategoryCreate, CategoryRepository, CategoryTable
from .product import Product, ProductCreate, ProductRepository, ProductTable
from .sub_variant import (
    SubVariant,
    SubVariantCreate,
    SubVariantRepository,
    SubVariantTable,
)
from .variant import Variant, VariantCreate, VariantRepository, VariantTable

__all__ = [
    "Category",
    "CategoryCreate",
    "CategoryRepository",
    "CategoryTable",
    "Product",
    "ProductCreate",
    "ProductRepository",
    "ProductTable",
    "SubVariant",
    "SubVariantCreate",
    "SubVariantRepository",
    "SubVariantTable",
    "Variant",
    "VariantCreate",
    "VariantRepository",
    "VariantTable",
]
