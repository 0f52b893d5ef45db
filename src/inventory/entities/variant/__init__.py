"""Entity package: Variant."""

from .entity import Variant, VariantCreate
from .repository import VariantRepository
from .table import VariantTable

__all__ = ["Variant", "VariantCreate", "VariantRepository", "VariantTable"]
