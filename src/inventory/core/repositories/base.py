"""Generic repository contract and its SQL and in-memory implementations.

Every entity kind is stored through the same set of operations:
create, get/find by identifier, list (optionally filtered by field
equality), update and delete. ``SqlRepository`` is bound to a SQLModel
session; ``InMemoryRepository`` keeps entities in a dict and is used as a
fake in tests.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, Protocol, TypeVar

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.inventory.core.entities._base import (
    Entity,
    EntityTable,
    TimestampedEntity,
    utc_now,
)
from src.inventory.core.errors import (
    ConflictError,
    NotFound,
    StorageError,
    ValidationError,
)

EntityT = TypeVar("EntityT", bound=Entity)
TableT = TypeVar("TableT", bound=EntityTable)


class Repository(Protocol[EntityT]):
    """Storage operations available for one entity kind."""

    def create(self, entity: EntityT | None) -> EntityT: ...

    def get(self, entity_id: uuid.UUID) -> EntityT: ...

    def find(self, entity_id: uuid.UUID) -> EntityT | None: ...

    def get_for_update(self, entity_id: uuid.UUID) -> EntityT: ...

    def list_all(self) -> list[EntityT]: ...

    def list_by(self, **filters: Any) -> list[EntityT]: ...

    def update(self, entity: EntityT | None) -> EntityT: ...

    def delete(self, entity_id: uuid.UUID) -> None: ...


def prepare_new(entity: EntityT | None, kind: str) -> EntityT:
    """Assign a fresh identifier and, for timestamped kinds, equal timestamps."""
    if entity is None:
        raise ValidationError(f"{kind} data is null.")

    changes: dict[str, Any] = {"id": uuid.uuid4()}
    if isinstance(entity, TimestampedEntity):
        now = utc_now()
        changes["created_date"] = now
        changes["updated_date"] = now
    return entity.model_copy(update=changes)


def prepare_update(entity: EntityT | None, existing: EntityT, kind: str) -> EntityT:
    """Carry over the stored creation time and refresh the update time."""
    if entity is None:
        raise ValidationError(f"{kind} data is null.")

    if isinstance(existing, TimestampedEntity):
        now = max(utc_now(), existing.created_date)
        return entity.model_copy(
            update={"created_date": existing.created_date, "updated_date": now}
        )
    return entity


def check_filters(entity_type: type[Entity], filters: dict[str, Any]) -> None:
    unknown = set(filters) - set(entity_type.model_fields)
    if unknown:
        raise ValidationError(
            f"Unknown {entity_type.__name__} field(s): {', '.join(sorted(unknown))}"
        )


class SqlRepository(Generic[EntityT, TableT]):
    """Data-access layer for one entity kind backed by a SQLModel session.

    Subclasses bind ``entity_type`` and ``table_type``. Writes are flushed
    but not committed; the caller owns the transaction.
    """

    entity_type: type[EntityT]
    table_type: type[TableT]
    unique_fields: tuple[str, ...] = ()

    def __init__(self, session: Session) -> None:
        self._session = session

    @classmethod
    def in_memory(cls) -> "InMemoryRepository[EntityT]":
        """Build a dict-backed fake with the same entity kind and constraints."""
        return InMemoryRepository(cls.entity_type, cls.unique_fields)

    @property
    def kind(self) -> str:
        return self.entity_type.__name__

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            raise ConflictError(
                f"{self.kind} conflicts with an existing record"
            ) from exc
        except SQLAlchemyError as exc:
            logger.bind(error_type=type(exc).__name__).exception(
                "Storage failure in {} repository", self.kind
            )
            raise StorageError(f"{self.kind} storage failure") from exc

    def _to_entity(self, row: TableT) -> EntityT:
        return self.entity_type.model_validate(row, from_attributes=True)

    def _get_row(self, entity_id: uuid.UUID) -> TableT | None:
        with self._translate_errors():
            return self._session.get(self.table_type, entity_id)

    def create(self, entity: EntityT | None) -> EntityT:
        new_entity = prepare_new(entity, self.kind)
        row = self.table_type.model_validate(new_entity.model_dump())
        with self._translate_errors():
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        logger.debug("Created {} {}", self.kind, row.id)
        return self._to_entity(row)

    def find(self, entity_id: uuid.UUID) -> EntityT | None:
        row = self._get_row(entity_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get(self, entity_id: uuid.UUID) -> EntityT:
        found = self.find(entity_id)
        if found is None:
            raise NotFound(self.kind, entity_id)
        return found

    def locking_select(self, entity_id: uuid.UUID):
        """Select one row with a row lock held until the transaction ends."""
        return (
            select(self.table_type)
            .where(self.table_type.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

    def get_for_update(self, entity_id: uuid.UUID) -> EntityT:
        """Like ``get``, but concurrent writers of the row wait for this one."""
        with self._translate_errors():
            row = self._session.exec(self.locking_select(entity_id)).first()
        if row is None:
            raise NotFound(self.kind, entity_id)
        return self._to_entity(row)

    def list_all(self) -> list[EntityT]:
        with self._translate_errors():
            rows = self._session.exec(select(self.table_type)).all()
        return [self._to_entity(row) for row in rows]

    def list_by(self, **filters: Any) -> list[EntityT]:
        check_filters(self.entity_type, filters)
        statement = select(self.table_type).filter_by(**filters)
        with self._translate_errors():
            rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def update(self, entity: EntityT | None) -> EntityT:
        if entity is None:
            raise ValidationError(f"{self.kind} data is null.")
        row = self._get_row(entity.id)
        if row is None:
            raise NotFound(self.kind, entity.id)

        updated = prepare_update(entity, self._to_entity(row), self.kind)
        with self._translate_errors():
            for field, value in updated.model_dump(exclude={"id"}).items():
                setattr(row, field, value)
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        logger.debug("Updated {} {}", self.kind, row.id)
        return self._to_entity(row)

    def delete(self, entity_id: uuid.UUID) -> None:
        row = self._get_row(entity_id)
        if row is None:
            raise NotFound(self.kind, entity_id)
        with self._translate_errors():
            self._session.delete(row)
            self._session.flush()
        logger.debug("Deleted {} {}", self.kind, entity_id)


class InMemoryRepository(Generic[EntityT]):
    """Dict-backed repository with the same contract as ``SqlRepository``.

    ``unique_fields`` emulates the unique constraints of the table.
    """

    def __init__(
        self, entity_type: type[EntityT], unique_fields: tuple[str, ...] = ()
    ) -> None:
        self.entity_type = entity_type
        self.unique_fields = unique_fields
        self._items: dict[uuid.UUID, EntityT] = {}

    @property
    def kind(self) -> str:
        return self.entity_type.__name__

    def __len__(self) -> int:
        return len(self._items)

    def _check_unique(self, entity: EntityT) -> None:
        for field in self.unique_fields:
            value = getattr(entity, field)
            for other in self._items.values():
                if other.id != entity.id and getattr(other, field) == value:
                    raise ConflictError(
                        f"{self.kind} with {field}={value!r} already exists"
                    )

    def create(self, entity: EntityT | None) -> EntityT:
        new_entity = prepare_new(entity, self.kind)
        self._check_unique(new_entity)
        self._items[new_entity.id] = new_entity
        return new_entity.model_copy(deep=True)

    def find(self, entity_id: uuid.UUID) -> EntityT | None:
        found = self._items.get(entity_id)
        return None if found is None else found.model_copy(deep=True)

    def get(self, entity_id: uuid.UUID) -> EntityT:
        found = self.find(entity_id)
        if found is None:
            raise NotFound(self.kind, entity_id)
        return found

    def get_for_update(self, entity_id: uuid.UUID) -> EntityT:
        return self.get(entity_id)

    def list_all(self) -> list[EntityT]:
        return [item.model_copy(deep=True) for item in self._items.values()]

    def list_by(self, **filters: Any) -> list[EntityT]:
        check_filters(self.entity_type, filters)
        return [
            item.model_copy(deep=True)
            for item in self._items.values()
            if all(getattr(item, name) == value for name, value in filters.items())
        ]

    def update(self, entity: EntityT | None) -> EntityT:
        if entity is None:
            raise ValidationError(f"{self.kind} data is null.")
        existing = self._items.get(entity.id)
        if existing is None:
            raise NotFound(self.kind, entity.id)

        updated = prepare_update(entity, existing, self.kind)
        self._check_unique(updated)
        self._items[updated.id] = updated
        return updated.model_copy(deep=True)

    def delete(self, entity_id: uuid.UUID) -> None:
        if self._items.pop(entity_id, None) is None:
            raise NotFound(self.kind, entity_id)
