"""Entity package: SubVariant."""

from .entity import SubVariant, SubVariantCreate
from .repository import SubVariantRepository
from .table import SubVariantTable

__all__ = ["SubVariant", "SubVariantCreate", "SubVariantRepository", "SubVariantTable"]
