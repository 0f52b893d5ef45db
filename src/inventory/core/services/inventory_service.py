"""Cross-entity inventory rules on top of the per-kind repositories."""

from __future__ import annotations

import uuid
from decimal import Decimal

from loguru import logger
from sqlmodel import Session

from src.inventory.core.errors import ConflictError, ValidationError
from src.inventory.core.repositories.base import Repository
from src.inventory.entities import (
    Category,
    CategoryCreate,
    CategoryRepository,
    Product,
    ProductCreate,
    ProductRepository,
    SubVariant,
    SubVariantCreate,
    SubVariantRepository,
    Variant,
    VariantCreate,
    VariantRepository,
)


class InventoryService:
    """Product, variant, sub-variant and category operations.

    The service keeps the ownership tree consistent: children are only
    created under existing parents, parents with children are not removed,
    and a product's ``total_stock`` follows the stock of its sub-variants.
    Products are never removed; deleting one clears its ``active`` flag.
    """

    def __init__(
        self,
        products: Repository[Product],
        variants: Repository[Variant],
        sub_variants: Repository[SubVariant],
        categories: Repository[Category],
    ) -> None:
        self.products = products
        self.variants = variants
        self.sub_variants = sub_variants
        self.categories = categories

    @classmethod
    def from_session(cls, session: Session) -> InventoryService:
        return cls(
            products=ProductRepository(session),
            variants=VariantRepository(session),
            sub_variants=SubVariantRepository(session),
            categories=CategoryRepository(session),
        )

    @classmethod
    def in_memory(cls) -> InventoryService:
        return cls(
            products=ProductRepository.in_memory(),
            variants=VariantRepository.in_memory(),
            sub_variants=SubVariantRepository.in_memory(),
            categories=CategoryRepository.in_memory(),
        )

    # --- Products ---

    def _check_category(self, category_id: uuid.UUID | None) -> None:
        if category_id is not None and self.categories.find(category_id) is None:
            raise ValidationError(f"Category {category_id} does not exist")

    def create_product(self, data: ProductCreate | None) -> Product:
        if data is None:
            raise ValidationError("Product data is null.")
        self._check_category(data.category_id)

        product = self.products.create(Product(**data.model_dump()))
        logger.info("Created product {} ({})", product.id, product.product_code)
        return product

    def get_product(self, product_id: uuid.UUID) -> Product:
        return self.products.get(product_id)

    def list_products(self, active: bool | None = None) -> list[Product]:
        if active is None:
            return self.products.list_all()
        return self.products.list_by(active=active)

    def update_product(
        self, product_id: uuid.UUID, data: ProductCreate | None
    ) -> Product:
        if data is None:
            raise ValidationError("Product data is null.")
        existing = self.products.get_for_update(product_id)
        self._check_category(data.category_id)

        changes = data.model_dump()
        if self._sub_variants_of_product(product_id):
            # Aggregated stock wins over the submitted value
            changes["total_stock"] = existing.total_stock
        product = self.products.update(existing.model_copy(update=changes))
        logger.info("Updated product {}", product.id)
        return product

    def deactivate_product(self, product_id: uuid.UUID) -> Product:
        existing = self.products.get_for_update(product_id)
        product = self.products.update(existing.model_copy(update={"active": False}))
        logger.info("Deactivated product {}", product.id)
        return product

    # --- Variants ---

    def add_variant(
        self, product_id: uuid.UUID, data: VariantCreate | None
    ) -> Variant:
        if data is None:
            raise ValidationError("Variant data is null.")
        self.products.get(product_id)

        variant = self.variants.create(
            Variant(product_id=product_id, **data.model_dump())
        )
        logger.info("Added variant {} to product {}", variant.id, product_id)
        return variant

    def get_variant(self, variant_id: uuid.UUID) -> Variant:
        return self.variants.get(variant_id)

    def list_variants(self, product_id: uuid.UUID) -> list[Variant]:
        self.products.get(product_id)
        return self.variants.list_by(product_id=product_id)

    def delete_variant(self, variant_id: uuid.UUID) -> None:
        self.variants.get(variant_id)
        if self.sub_variants.list_by(variant_id=variant_id):
            raise ConflictError(f"Variant {variant_id} still has sub-variants")
        self.variants.delete(variant_id)
        logger.info("Deleted variant {}", variant_id)

    # --- Sub-variants ---

    def add_sub_variant(
        self, variant_id: uuid.UUID, data: SubVariantCreate | None
    ) -> SubVariant:
        if data is None:
            raise ValidationError("SubVariant data is null.")
        variant = self.variants.get(variant_id)

        sub_variant = self.sub_variants.create(
            SubVariant(variant_id=variant_id, **data.model_dump())
        )
        self.recalculate_total_stock(variant.product_id)
        logger.info("Added sub-variant {} to variant {}", sub_variant.id, variant_id)
        return sub_variant

    def get_sub_variant(self, sub_variant_id: uuid.UUID) -> SubVariant:
        return self.sub_variants.get(sub_variant_id)

    def list_sub_variants(self, variant_id: uuid.UUID) -> list[SubVariant]:
        self.variants.get(variant_id)
        return self.sub_variants.list_by(variant_id=variant_id)

    def update_sub_variant(
        self, sub_variant_id: uuid.UUID, data: SubVariantCreate | None
    ) -> SubVariant:
        if data is None:
            raise ValidationError("SubVariant data is null.")
        existing = self.sub_variants.get(sub_variant_id)

        sub_variant = self.sub_variants.update(
            existing.model_copy(update=data.model_dump())
        )
        variant = self.variants.get(sub_variant.variant_id)
        self.recalculate_total_stock(variant.product_id)
        return sub_variant

    def delete_sub_variant(self, sub_variant_id: uuid.UUID) -> None:
        sub_variant = self.sub_variants.get(sub_variant_id)
        variant = self.variants.get(sub_variant.variant_id)
        self.sub_variants.delete(sub_variant_id)
        self.recalculate_total_stock(variant.product_id)
        logger.info("Deleted sub-variant {}", sub_variant_id)

    # --- Stock ---

    def _sub_variants_of_product(self, product_id: uuid.UUID) -> list[SubVariant]:
        sub_variants: list[SubVariant] = []
        for variant in self.variants.list_by(product_id=product_id):
            sub_variants.extend(self.sub_variants.list_by(variant_id=variant.id))
        return sub_variants

    def recalculate_total_stock(self, product_id: uuid.UUID) -> Product:
        """Set the product's total stock to the sum of its sub-variant stocks.

        The product row is locked first, so concurrent writers of the same
        product sum one after the other over committed rows.
        """
        product = self.products.get_for_update(product_id)
        total = sum(
            (sv.stock for sv in self._sub_variants_of_product(product_id)),
            Decimal("0"),
        )
        if total == product.total_stock:
            return product

        logger.debug(
            "Total stock of product {} changed from {} to {}",
            product_id,
            product.total_stock,
            total,
        )
        return self.products.update(product.model_copy(update={"total_stock": total}))

    # --- Categories ---

    def create_category(self, data: CategoryCreate | None) -> Category:
        if data is None:
            raise ValidationError("Category data is null.")
        category = self.categories.create(Category(**data.model_dump()))
        logger.info("Created category {} ({})", category.id, category.name)
        return category

    def get_category(self, category_id: uuid.UUID) -> Category:
        return self.categories.get(category_id)

    def list_categories(self) -> list[Category]:
        return self.categories.list_all()

    def list_category_products(self, category_id: uuid.UUID) -> list[Product]:
        self.categories.get(category_id)
        return self.products.list_by(category_id=category_id)

    def delete_category(self, category_id: uuid.UUID) -> None:
        self.categories.get(category_id)
        if self.products.list_by(category_id=category_id):
            raise ConflictError(f"Category {category_id} still has products")
        self.categories.delete(category_id)
        logger.info("Deleted category {}", category_id)
