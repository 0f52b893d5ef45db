from src.inventory.core.repositories.base import SqlRepository
from src.inventory.entities.variant.entity import Variant
from src.inventory.entities.variant.table import VariantTable


class VariantRepository(SqlRepository[Variant, VariantTable]):
    """Data-access layer for variants."""

    entity_type = Variant
    table_type = VariantTable
