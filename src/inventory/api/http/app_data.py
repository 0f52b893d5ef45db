from dataclasses import dataclass

from src.inventory.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    request_timeout_seconds: float
