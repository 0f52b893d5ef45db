from src.inventory.core.repositories.base import SqlRepository
from src.inventory.entities.category.entity import Category
from src.inventory.entities.category.table import CategoryTable


class CategoryRepository(SqlRepository[Category, CategoryTable]):
    """Data-access layer for categories."""

    entity_type = Category
    table_type = CategoryTable
