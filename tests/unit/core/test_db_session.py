"""Tests for the database session service."""

import time

import pytest
from sqlalchemy import Engine, StaticPool
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from src.inventory.core.errors import ConflictError, DeadlineExceeded, StorageError
from src.inventory.core.services import DbSessionService
from src.inventory.core.services.database.db_session import build_engine
from src.inventory.entities import ProductTable
from src.inventory.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
)


class TestSessionScope:
    def test_commits_on_success(self, database_service: DbSessionService):
        with database_service.session_scope() as session:
            session.add(ProductTable(product_code="P-001", product_name="Widget"))

        with database_service.session_scope() as session:
            rows = session.exec(select(ProductTable)).all()
        assert [row.product_code for row in rows] == ["P-001"]

    def test_rolls_back_on_error(self, database_service: DbSessionService):
        with pytest.raises(RuntimeError):
            with database_service.session_scope() as session:
                session.add(ProductTable(product_code="P-001", product_name="Widget"))
                session.flush()
                raise RuntimeError("boom")

        with database_service.session_scope() as session:
            assert session.exec(select(ProductTable)).all() == []

    def test_passed_deadline_rolls_back(self, database_service: DbSessionService):
        with pytest.raises(DeadlineExceeded):
            with database_service.session_scope(
                deadline=time.monotonic() - 1
            ) as session:
                session.add(ProductTable(product_code="P-001", product_name="Widget"))

        with database_service.session_scope() as session:
            assert session.exec(select(ProductTable)).all() == []

    def test_future_deadline_commits(self, database_service: DbSessionService):
        with database_service.session_scope(
            deadline=time.monotonic() + 60
        ) as session:
            session.add(ProductTable(product_code="P-001", product_name="Widget"))

        with database_service.session_scope() as session:
            assert len(session.exec(select(ProductTable)).all()) == 1

    def test_commit_failure_becomes_storage_error(
        self, database_service: DbSessionService, monkeypatch
    ):
        def broken_commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", broken_commit)

        with pytest.raises(StorageError) as exc_info:
            with database_service.session_scope() as session:
                session.add(ProductTable(product_code="P-001", product_name="Widget"))

        assert "disk" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_commit_conflict_becomes_conflict_error(
        self, database_service: DbSessionService
    ):
        with database_service.session_scope() as session:
            session.add(ProductTable(product_code="P-001", product_name="Widget"))

        with pytest.raises(ConflictError):
            with database_service.session_scope() as session:
                # Not flushed, so the unique index fires on commit
                session.add(ProductTable(product_code="P-001", product_name="Other"))


class TestHealthCheck:
    def test_healthy(self, database_service: DbSessionService):
        assert database_service.health_check() is True


class TestBuildEngine:
    def test_in_memory_sqlite_uses_static_pool(self):
        config = ConfigData(
            app=AppConfig(environment="test"),
            database=DatabaseConfig(url="sqlite:///:memory:"),
        )

        engine = build_engine(config)
        try:
            assert isinstance(engine, Engine)
            assert isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()
