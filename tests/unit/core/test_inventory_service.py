"""Unit tests for the inventory service rules."""

import uuid
from decimal import Decimal

import pytest

from src.inventory.core.errors import ConflictError, NotFound, ValidationError
from src.inventory.core.services import InventoryService
from src.inventory.entities import VariantCreate


def variant_data_named(name: str) -> VariantCreate:
    return VariantCreate(name=name)


class TestProducts:
    def test_create_product_scenario(self, memory_service: InventoryService, product_data):
        """Create P-001, read it back, miss on a random id."""
        created = memory_service.create_product(
            product_data(product_code="P-001", product_name="Widget")
        )

        assert isinstance(created.id, uuid.UUID)
        assert created.created_date == created.updated_date
        assert created.active is True
        assert created.is_favourite is False
        assert memory_service.get_product(created.id) == created
        with pytest.raises(NotFound):
            memory_service.get_product(uuid.uuid4())

    def test_create_none_rejected(self, memory_service: InventoryService):
        with pytest.raises(ValidationError):
            memory_service.create_product(None)

        assert memory_service.list_products() == []

    def test_unknown_category_rejected(self, memory_service: InventoryService, product_data):
        with pytest.raises(ValidationError):
            memory_service.create_product(product_data(category_id=uuid.uuid4()))

    def test_deactivate_is_soft_delete(self, memory_service: InventoryService, product_data):
        created = memory_service.create_product(product_data())

        deactivated = memory_service.deactivate_product(created.id)

        assert deactivated.active is False
        assert deactivated.updated_date >= created.updated_date
        assert memory_service.get_product(created.id).active is False
        assert memory_service.list_products(active=True) == []
        assert len(memory_service.list_products()) == 1

    def test_update_product(self, memory_service: InventoryService, product_data):
        created = memory_service.create_product(product_data(product_code="P-001"))

        updated = memory_service.update_product(
            created.id,
            product_data(product_code="P-001", product_name="Renamed", is_favourite=True),
        )

        assert updated.id == created.id
        assert updated.product_name == "Renamed"
        assert updated.is_favourite is True
        assert updated.created_date == created.created_date

    def test_update_unknown_product(self, memory_service: InventoryService, product_data):
        with pytest.raises(NotFound):
            memory_service.update_product(uuid.uuid4(), product_data())


class TestVariants:
    def test_variant_requires_existing_product(
        self, memory_service: InventoryService, variant_data
    ):
        with pytest.raises(NotFound):
            memory_service.add_variant(uuid.uuid4(), variant_data)

    def test_variants_listed_per_product(
        self, memory_service: InventoryService, product_data, variant_data
    ):
        first = memory_service.create_product(product_data())
        second = memory_service.create_product(product_data())
        variant = memory_service.add_variant(first.id, variant_data)

        assert memory_service.list_variants(first.id) == [variant]
        assert memory_service.list_variants(second.id) == []

    def test_variant_with_sub_variants_cannot_be_deleted(
        self, memory_service: InventoryService, product_data, variant_data, sub_variant_data
    ):
        product = memory_service.create_product(product_data())
        variant = memory_service.add_variant(product.id, variant_data)
        memory_service.add_sub_variant(variant.id, sub_variant_data())

        with pytest.raises(ConflictError):
            memory_service.delete_variant(variant.id)

    def test_delete_empty_variant(
        self, memory_service: InventoryService, product_data, variant_data
    ):
        product = memory_service.create_product(product_data())
        variant = memory_service.add_variant(product.id, variant_data)

        memory_service.delete_variant(variant.id)

        with pytest.raises(NotFound):
            memory_service.get_variant(variant.id)


class TestTotalStock:
    """Total stock follows the sub-variant stocks of the product."""

    @pytest.fixture
    def shirt(self, memory_service: InventoryService, product_data):
        return memory_service.create_product(product_data(total_stock=Decimal("99")))

    def test_manual_stock_kept_without_sub_variants(self, memory_service, shirt):
        assert memory_service.get_product(shirt.id).total_stock == Decimal("99")

    def test_stock_aggregates_across_variants(
        self, memory_service: InventoryService, shirt, sub_variant_data
    ):
        size = memory_service.add_variant(shirt.id, variant_data_named("Size"))
        color = memory_service.add_variant(shirt.id, variant_data_named("Color"))

        memory_service.add_sub_variant(size.id, sub_variant_data("Large", "2.5"))
        memory_service.add_sub_variant(size.id, sub_variant_data("Small", 3))
        memory_service.add_sub_variant(color.id, sub_variant_data("Red", 4))

        assert memory_service.get_product(shirt.id).total_stock == Decimal("9.5")

    def test_stock_follows_updates_and_deletes(
        self, memory_service: InventoryService, shirt, sub_variant_data
    ):
        size = memory_service.add_variant(shirt.id, variant_data_named("Size"))
        large = memory_service.add_sub_variant(size.id, sub_variant_data("Large", 5))
        small = memory_service.add_sub_variant(size.id, sub_variant_data("Small", 1))

        memory_service.update_sub_variant(large.id, sub_variant_data("Large", 10))
        assert memory_service.get_product(shirt.id).total_stock == Decimal("11")

        memory_service.delete_sub_variant(small.id)
        assert memory_service.get_product(shirt.id).total_stock == Decimal("10")

    def test_product_update_keeps_aggregate(
        self, memory_service: InventoryService, shirt, product_data, sub_variant_data
    ):
        size = memory_service.add_variant(shirt.id, variant_data_named("Size"))
        memory_service.add_sub_variant(size.id, sub_variant_data("Large", 7))

        updated = memory_service.update_product(
            shirt.id,
            product_data(product_code=shirt.product_code, total_stock=Decimal("1000")),
        )

        assert updated.total_stock == Decimal("7")

    def test_aggregation_through_sql_repositories(
        self, sql_service: InventoryService, product_data, sub_variant_data
    ):
        product = sql_service.create_product(product_data())
        variant = sql_service.add_variant(product.id, variant_data_named("Size"))
        sql_service.add_sub_variant(variant.id, sub_variant_data("Large", "1.5"))
        sql_service.add_sub_variant(variant.id, sub_variant_data("Small", 2))

        assert sql_service.get_product(product.id).total_stock == Decimal("3.5")

    def test_recalculation_locks_the_product_row(
        self, sql_service: InventoryService, product_data, sub_variant_data, monkeypatch
    ):
        product = sql_service.create_product(product_data())
        variant = sql_service.add_variant(product.id, variant_data_named("Size"))
        locked = []
        get_for_update = sql_service.products.get_for_update

        def recording_get_for_update(entity_id):
            locked.append(entity_id)
            return get_for_update(entity_id)

        monkeypatch.setattr(
            sql_service.products, "get_for_update", recording_get_for_update
        )

        sql_service.add_sub_variant(variant.id, sub_variant_data("Large", 1))

        assert locked == [product.id]


class TestCategories:
    def test_category_products(
        self, memory_service: InventoryService, category_data, product_data
    ):
        category = memory_service.create_category(category_data)
        filed = memory_service.create_product(product_data(category_id=category.id))
        memory_service.create_product(product_data())

        assert memory_service.list_category_products(category.id) == [filed]

    def test_category_in_use_cannot_be_deleted(
        self, memory_service: InventoryService, category_data, product_data
    ):
        category = memory_service.create_category(category_data)
        memory_service.create_product(product_data(category_id=category.id))

        with pytest.raises(ConflictError):
            memory_service.delete_category(category.id)

    def test_delete_unused_category(self, memory_service: InventoryService, category_data):
        category = memory_service.create_category(category_data)

        memory_service.delete_category(category.id)

        assert memory_service.list_categories() == []
