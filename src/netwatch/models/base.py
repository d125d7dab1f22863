"""Declarative base for the NetWatch SQLAlchemy models."""

from datetime import UTC, datetime
from typing import ClassVar

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Provides type_annotation_map for automatic type inference from Python types.
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from backends such as SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
