"""Database engine and session factory used across the application."""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, StaticPool, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, create_engine

from src.inventory.core.errors import ConflictError, DeadlineExceeded, StorageError
from src.inventory.runtime.config.config_data import ConfigData
from src.inventory.runtime.context import get_config


def build_engine(config: ConfigData) -> Engine:
    """Create an engine tuned for the configured database backend."""
    db_config = config.database
    engine_kwargs: dict[str, Any] = {
        "echo": db_config.echo,
        "connect_args": _get_connect_args(config),
    }

    if db_config.is_sqlite:
        # One shared connection keeps an in-memory database alive
        if ":memory:" in db_config.url:
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,  # Validate connections before use
            }
        )

    logger.info(
        "Initializing database engine for {} environment",
        config.app.environment,
    )
    return create_engine(db_config.connection_string, **engine_kwargs)


def _get_connect_args(config: ConfigData) -> dict:
    """Get database-specific connection arguments."""
    connect_args: dict[str, Any] = {}

    if "postgresql" in config.database.url:
        connect_args.update(
            {
                "application_name": f"{config.app.environment}_inventory",
                "connect_timeout": 30,
                # Server side cap on statement duration, in milliseconds
                "options": f"-c statement_timeout={int(config.app.request_timeout_seconds * 1000)}",
            }
        )

    elif config.database.is_sqlite:
        connect_args.update(
            {
                "check_same_thread": False,
                "timeout": 20,  # Lock timeout
            }
        )

        if config.app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )

    return connect_args


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        self._engine = engine if engine is not None else build_engine(get_config())

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self, deadline: float | None = None) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error.

        ``deadline`` is a ``time.monotonic()`` value. When it has passed by the
        time the block finishes, the work is rolled back instead of committed
        and ``DeadlineExceeded`` is raised.
        """
        db = self.get_session()
        try:
            yield db
            if deadline is not None and time.monotonic() > deadline:
                raise DeadlineExceeded("Deadline passed before commit")
            self._commit(db)
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).debug(
                "Database transaction rolled back"
            )
            raise
        finally:
            db.close()

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            raise ConflictError("Commit conflicts with an existing record") from e
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).exception("Commit failed")
            raise StorageError("Commit failed") from e

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
