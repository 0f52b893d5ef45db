"""Application services."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .inventory_service import InventoryService

__all__ = ["DbManageService", "DbSessionService", "InventoryService"]
