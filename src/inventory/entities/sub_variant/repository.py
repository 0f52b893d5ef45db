from src.inventory.core.repositories.base import SqlRepository
from src.inventory.entities.sub_variant.entity import SubVariant
from src.inventory.entities.sub_variant.table import SubVariantTable


class SubVariantRepository(SqlRepository[SubVariant, SubVariantTable]):
    """Data-access layer for sub-variants."""

    entity_type = SubVariant
    table_type = SubVariantTable
