import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Self

import sqlalchemy as sa
from pydantic import BaseModel, field_validator, model_validator
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity class with an auto-generated UUID identifier.

    The identifier is frozen: once assigned it never changes.
    """

    id: uuid.UUID = PydanticField(
        default_factory=uuid.uuid4,
        frozen=True,
        description="Unique identifier for the entity",
    )


class TimestampedEntity(Entity):
    """Entity carrying creation and last-update timestamps."""

    created_date: datetime = PydanticField(default_factory=utc_now)
    updated_date: datetime = PydanticField(default_factory=utc_now)

    @field_validator("created_date", "updated_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @model_validator(mode="after")
    def _created_before_updated(self) -> Self:
        if self.created_date > self.updated_date:
            raise ValueError("created_date must not be later than updated_date")
        return self


class EntityTable(SQLModel, table=False):
    """Base table with a UUID primary key."""

    id: uuid.UUID = Field(
        primary_key=True,
        default_factory=uuid.uuid4,
        description="Unique identifier for the entity",
    )


class TimestampedTable(EntityTable, table=False):
    """Base table for rows that track creation and update time."""

    created_date: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        nullable=False,
    )
    updated_date: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        nullable=False,
    )


class ExactDecimal(sa.types.TypeDecorator):
    """Fixed-point column that keeps every digit on every backend.

    SQLite has no fixed-point storage and reads ``NUMERIC`` back through
    float, so there the value is stored as text.
    """

    impl = sa.Numeric
    cache_ok = True

    def __init__(self, precision: int = 18, scale: int = 3) -> None:
        super().__init__(precision=precision, scale=scale, asdecimal=True)
        self.precision = precision
        self.scale = scale

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            # sign, point and digits
            return dialect.type_descriptor(sa.String(self.precision + 2))
        return dialect.type_descriptor(sa.Numeric(self.precision, self.scale))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return format(Decimal(value), "f")

    def process_result_value(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return Decimal(value)
