"""FastAPI application factory and setup."""

import asyncio
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.api.http.routers.health import router as health_router
from src.inventory.api.http.routers.service.category import router as category_router
from src.inventory.api.http.routers.service.product import router as product_router
from src.inventory.api.http.routers.service.sub_variant import (
    router as sub_variant_router,
)
from src.inventory.api.http.routers.service.variant import router as variant_router
from src.inventory.api.utils.app_startup import configure_logging
from src.inventory.core.errors import InventoryError, StorageError
from src.inventory.core.services import DbManageService, DbSessionService
from src.inventory.runtime.context import get_config

__all__ = ["app", "create_app"]


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "-"


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Translate domain errors into JSON responses."""
    request_id = _request_id(request)
    if isinstance(exc, StorageError):
        # The cause was logged where it happened; clients get no internals
        detail = "Storage temporarily unavailable"
    else:
        detail = exc.message

    logger.bind(
        status_code=exc.status_code, error_type=type(exc).__name__
    ).warning("request.rejected: {}", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    timeout = app_deps.request_timeout_seconds
    start = time.perf_counter()
    request.state.deadline = time.monotonic() + timeout

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await asyncio.wait_for(call_next(request), timeout=timeout)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except TimeoutError:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=504,
                duration_ms=round(duration_ms, 1),
            ).error("request.timeout")
            return JSONResponse(
                status_code=504,
                content={"detail": "Request timed out", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


def create_app(database_service: DbSessionService | None = None) -> FastAPI:
    """Build the application.

    ``database_service`` is created from configuration on startup when not
    given; tests pass one bound to an in-memory engine.
    """
    configure_logging()
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_service = database_service or DbSessionService()
        DbManageService(db_service.engine).create_all()
        app.state.app_dependencies = ApplicationDependencies(
            database_service=db_service,
            request_timeout_seconds=config.app.request_timeout_seconds,
        )
        logger.info("Starting up application in {} environment", config.app.environment)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            if database_service is None:
                db_service.dispose()

    app = FastAPI(
        title="Product Inventory",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)
    app.add_exception_handler(InventoryError, inventory_error_handler)

    app.include_router(health_router)
    app.include_router(product_router, prefix="/api")
    app.include_router(variant_router, prefix="/api")
    app.include_router(sub_variant_router, prefix="/api")
    app.include_router(category_router, prefix="/api")

    return app


app = create_app()
