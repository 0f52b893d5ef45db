"""Schema management for the inventory database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        # Importing the table modules registers them with the metadata
        from src.inventory.entities import (  # noqa: F401
            CategoryTable,
            ProductTable,
            SubVariantTable,
            VariantTable,
        )

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("All database tables dropped.")
