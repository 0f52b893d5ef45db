"""FastAPI dependency implementations."""

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.core.services import InventoryService


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a request-scoped session committed when the request succeeds.

    Nothing is committed once the request deadline set by the request
    middleware has passed.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    deadline = getattr(request.state, "deadline", None)
    with app_deps.database_service.session_scope(deadline=deadline) as session:
        yield session


def get_inventory_service(
    # Commit before the response is sent so commit failures reach the client
    session: Session = Depends(get_db_session, scope="function"),
) -> InventoryService:
    return InventoryService.from_session(session)
