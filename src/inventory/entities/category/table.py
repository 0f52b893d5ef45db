"""Category database table model."""

from sqlmodel import Field

from src.inventory.core.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "categories"

    name: str = Field(max_length=255)
