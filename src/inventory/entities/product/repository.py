from src.inventory.core.repositories.base import SqlRepository
from src.inventory.entities.product.entity import Product
from src.inventory.entities.product.table import ProductTable


class ProductRepository(SqlRepository[Product, ProductTable]):
    """Data-access layer for products."""

    entity_type = Product
    table_type = ProductTable
    unique_fields = ("product_code",)
